from pydantic import Field
from typing import Optional
from datetime import datetime
from inventory_sales.schemas.common import CamelModel, RequestModel, UpdateModel


class BusinessSaleCreate(RequestModel):
    product_id: int
    quantity_sold: int = Field(..., ge=1)
    sale_price: float = Field(..., ge=0)
    business_percentage: float = Field(..., ge=0, le=100)
    sale_date: datetime


class BusinessSaleUpdate(UpdateModel):
    product_id: Optional[int] = None
    quantity_sold: Optional[int] = Field(None, ge=1)
    sale_price: Optional[float] = Field(None, ge=0)
    business_percentage: Optional[float] = Field(None, ge=0, le=100)
    sale_date: Optional[datetime] = None


class BusinessSaleResponse(CamelModel):
    id: int
    business_id: int
    product_id: int
    quantity_sold: int
    sale_price: float
    business_percentage: float
    sale_date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BusinessSaleDetail(CamelModel):
    """A business sale joined with its product."""

    id: int
    product_id: int
    quantity_sold: int
    sale_price: float
    business_percentage: float
    sale_date: datetime
    name: str
    price: Optional[float] = None
    cost: Optional[float] = None
    sku: str


class BusinessSaleEnvelope(CamelModel):
    business_sale: BusinessSaleResponse


class BusinessSaleDetailEnvelope(CamelModel):
    business_sale: BusinessSaleDetail


class BusinessSaleListResponse(CamelModel):
    business_sales: list[BusinessSaleDetail]
