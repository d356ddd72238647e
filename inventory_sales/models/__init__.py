from inventory_sales.models.user import User
from inventory_sales.models.product import Product
from inventory_sales.models.sale import Sale
from inventory_sales.models.business import Business
from inventory_sales.models.business_sale import BusinessSale

__all__ = ["User", "Product", "Sale", "Business", "BusinessSale"]
