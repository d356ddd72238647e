from pydantic import Field
from typing import Optional
from datetime import datetime
from inventory_sales.schemas.common import CamelModel, RequestModel, UpdateModel


class SaleCreate(RequestModel):
    quantity_sold: int = Field(..., ge=1)
    sale_price: float = Field(..., ge=0)
    sale_date: datetime


class SaleUpdate(UpdateModel):
    quantity_sold: Optional[int] = Field(None, ge=1)
    sale_price: Optional[float] = Field(None, ge=0)
    sale_date: Optional[datetime] = None


class SaleResponse(CamelModel):
    id: int
    user_id: int
    product_id: int
    quantity_sold: int
    sale_price: float
    sale_date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductSaleResponse(CamelModel):
    """A sale joined with the product it was made from."""

    id: int
    quantity_sold: int
    sale_price: float
    sale_date: datetime
    name: str
    price: Optional[float] = None
    cost: Optional[float] = None
    sku: str
    quantity: int


class SaleEnvelope(CamelModel):
    sale: SaleResponse


class ProductSaleEnvelope(CamelModel):
    sale: ProductSaleResponse


class SaleListResponse(CamelModel):
    sales: list[ProductSaleResponse]
