from pydantic import Field
from typing import Optional
from datetime import datetime
from inventory_sales.schemas.common import CamelModel, RequestModel, UpdateModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class UserRegister(RequestModel):
    username: str = Field(..., min_length=1, max_length=30)
    password: str = Field(..., min_length=5, max_length=50)
    email: str = Field(..., min_length=6, max_length=60, pattern=EMAIL_PATTERN)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)


class UserLogin(RequestModel):
    username: str = Field(..., min_length=1, max_length=30)
    password: str = Field(..., min_length=1, max_length=50)


class UserUpdate(UpdateModel):
    username: Optional[str] = Field(None, min_length=1, max_length=30)
    password: Optional[str] = Field(None, min_length=5, max_length=50)
    email: Optional[str] = Field(None, min_length=6, max_length=60, pattern=EMAIL_PATTERN)
    first_name: Optional[str] = Field(None, min_length=1, max_length=30)
    last_name: Optional[str] = Field(None, min_length=1, max_length=30)


class UserResponse(CamelModel):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    is_admin: bool


class UserEnvelope(CamelModel):
    user: UserResponse
    token: Optional[str] = None


class UserListResponse(CamelModel):
    users: list[UserResponse]


class UserSaleRow(CamelModel):
    """A product joined with one of its sales (sale fields are null for unsold products)."""

    name: str
    price: Optional[float] = None
    cost: Optional[float] = None
    sku: str
    type: Optional[str] = None
    quantity_sold: Optional[int] = None
    sale_price: Optional[float] = None
    sale_date: Optional[datetime] = None


class UserSalesResponse(CamelModel):
    user_sales: list[UserSaleRow]


class UserBusinessSaleRow(CamelModel):
    business_name: str
    contact_info: Optional[str] = None
    product_name: str
    product_price: Optional[float] = None
    product_cost: Optional[float] = None
    product_sku: str
    product_type: Optional[str] = None
    quantity_sold: int
    sale_price: float
    business_percentage: Optional[float] = None
    sale_date: Optional[datetime] = None


class UserBusinessSalesResponse(CamelModel):
    business_sales: list[UserBusinessSaleRow]


class SalesInfoRow(CamelModel):
    """One row of the combined direct + business sales history."""

    sale_id: Optional[int] = None
    business_sale_id: Optional[int] = None
    product_id: int
    business_id: Optional[int] = None
    name: str
    price: Optional[float] = None
    cost: Optional[float] = None
    sku: str
    type: Optional[str] = None
    quantity_sold: int
    sale_price: float
    sale_date: Optional[datetime] = None
    business_name: Optional[str] = None
    contact_info: Optional[str] = None
    business_percentage: Optional[float] = None


class SalesInfoResponse(CamelModel):
    sales: list[SalesInfoRow]
