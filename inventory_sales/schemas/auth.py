from pydantic import ConfigDict, Field
from inventory_sales.schemas.common import CamelModel


class Identity(CamelModel):
    """Verified payload of a bearer token."""

    id: int
    username: str
    is_admin: bool = Field(False)

    model_config = ConfigDict(extra="ignore")
