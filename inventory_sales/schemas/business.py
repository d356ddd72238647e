from pydantic import Field
from typing import Optional
from datetime import datetime
from inventory_sales.schemas.common import CamelModel, RequestModel, UpdateModel


class BusinessCreate(RequestModel):
    name: str = Field(..., min_length=1, max_length=100, description="Business name (unique per owner)")
    contact_info: Optional[str] = Field(None, max_length=255)


class BusinessUpdate(UpdateModel):
    nullable_fields = frozenset({"contact_info"})

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    contact_info: Optional[str] = Field(None, max_length=255)


class BusinessResponse(CamelModel):
    id: int
    user_id: int
    name: str
    contact_info: Optional[str] = None
    created_at: Optional[datetime] = None


class BusinessEnvelope(CamelModel):
    business: BusinessResponse


class BusinessListResponse(CamelModel):
    businesses: list[BusinessResponse]
