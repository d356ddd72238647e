from pydantic import Field
from typing import Optional
from datetime import datetime
from inventory_sales.schemas.common import CamelModel, RequestModel, UpdateModel


class ProductBase(RequestModel):
    name: str = Field(..., min_length=1, max_length=100, description="Product name (unique per owner)")
    description: Optional[str] = Field(None, description="Product description")
    price: Optional[float] = Field(None, ge=0)
    cost: Optional[float] = Field(None, ge=0)
    sku: str = Field(..., min_length=1, max_length=50, description="Product SKU (unique per owner)")
    minutes_to_make: Optional[int] = Field(None, ge=0)
    type: Optional[str] = Field(None, max_length=50)
    quantity: int = Field(0, ge=0)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(UpdateModel):
    nullable_fields = frozenset({"description", "price", "cost", "minutes_to_make", "type"})

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    cost: Optional[float] = Field(None, ge=0)
    sku: Optional[str] = Field(None, min_length=1, max_length=50)
    minutes_to_make: Optional[int] = Field(None, ge=0)
    type: Optional[str] = Field(None, max_length=50)
    quantity: Optional[int] = Field(None, ge=0)


class ProductResponse(CamelModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    price: Optional[float] = None
    cost: Optional[float] = None
    sku: str
    minutes_to_make: Optional[int] = None
    type: Optional[str] = None
    quantity: int
    product_created_at: Optional[datetime] = None
    product_updated_at: Optional[datetime] = None
    quantity_updated_at: Optional[datetime] = None


class ProductEnvelope(CamelModel):
    product: ProductResponse


class ProductListResponse(CamelModel):
    products: list[ProductResponse]
