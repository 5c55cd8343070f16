"""
Parcel Pydantic schemas.

Defines the in-memory records the parcel store accepts and returns.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator
from parcel_tracker.app.models.parcel_enums import ParcelStatus


def utc_timestamp() -> str:
    """Current UTC time as RFC3339 text, e.g. 2024-05-01T12:30:00Z."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ParcelBase(BaseModel):
    """Fields shared by every parcel record."""
    client: int = Field(..., description="Owning client identifier")
    status: str = Field(default=ParcelStatus.REGISTERED.value, min_length=1, description="Status label")
    address: str = Field(..., min_length=1, description="Delivery address")
    created_at: str = Field(default_factory=utc_timestamp, description="RFC3339 creation time (UTC)")

    @field_validator("status", mode="before")
    @classmethod
    def status_to_label(cls, value):
        if isinstance(value, ParcelStatus):
            return value.value
        return value

    @field_validator("created_at")
    @classmethod
    def created_at_is_rfc3339(cls, value: str) -> str:
        try:
            datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError(f"created_at is not an RFC3339 timestamp: {value!r}") from exc
        return value


class ParcelCreate(ParcelBase):
    """Schema for registering a new parcel."""


class ParcelResponse(ParcelBase):
    """Schema for a stored parcel, including its assigned number."""
    number: int

    class Config:
        from_attributes = True
