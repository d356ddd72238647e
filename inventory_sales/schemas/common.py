from typing import ClassVar
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(CamelModel):
    model_config = ConfigDict(extra="forbid")


class UpdateModel(RequestModel):
    """Partial update body; at least one field must be supplied."""

    # fields that may be explicitly cleared with null
    nullable_fields: ClassVar[frozenset] = frozenset()

    @model_validator(mode="after")
    def _require_changes(self):
        if not self.model_fields_set:
            raise ValueError("No data")
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{name} may not be null")
        return self

    def changes(self) -> dict:
        """Fields the client sent, keyed by their API (camelCase) names."""
        return self.model_dump(exclude_unset=True, by_alias=True)


class MessageResponse(BaseModel):
    message: str
