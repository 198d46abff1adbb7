"""Pydantic schemas for ordering API request/response validation."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from scoped_ordering.domain.ordering.move import MoveAction


class OrderedRecordItem(BaseModel):
    """One record of a scope group."""

    id: int = Field(..., description="Record ID")
    position: int | None = Field(..., ge=0, description="Zero-based position within the group")


class ScopeGroupResponse(BaseModel):
    """Schema for a scope group, ascending by position."""

    record_type: str
    items: list[OrderedRecordItem] = Field(..., description="Records of the group")

    @classmethod
    def from_records(cls, record_type: str, records: list[Any]) -> "ScopeGroupResponse":
        return cls(
            record_type=record_type,
            items=[OrderedRecordItem(id=r.id, position=r.position) for r in records],
        )


class MoveRequest(BaseModel):
    """Schema for reordering a record."""

    action: MoveAction = Field(..., description="Move to perform")
    target_id: int | None = Field(
        None, description="Reference record for 'above' and 'below' moves"
    )

    @model_validator(mode="after")
    def validate_target(self) -> "MoveRequest":
        """Require a target exactly when the action needs one."""
        if self.action.needs_target and self.target_id is None:
            raise ValueError(f"target_id is required for action '{self.action}'")
        return self
