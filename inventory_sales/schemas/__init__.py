from inventory_sales.schemas.auth import Identity
from inventory_sales.schemas.user import UserRegister, UserLogin, UserUpdate, UserResponse
from inventory_sales.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from inventory_sales.schemas.sale import SaleCreate, SaleUpdate, SaleResponse
from inventory_sales.schemas.business import BusinessCreate, BusinessUpdate, BusinessResponse
from inventory_sales.schemas.business_sale import (
    BusinessSaleCreate,
    BusinessSaleUpdate,
    BusinessSaleResponse,
)

__all__ = [
    "Identity",
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "SaleCreate",
    "SaleUpdate",
    "SaleResponse",
    "BusinessCreate",
    "BusinessUpdate",
    "BusinessResponse",
    "BusinessSaleCreate",
    "BusinessSaleUpdate",
    "BusinessSaleResponse",
]
