"""
MongoDB models for submitted social profiles.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileStatus(str, Enum):
    """Publication status of a profile."""

    PENDING_PAYMENT = "pending_payment"
    APPROVED = "approved"
    # Written by older admin-review submissions, never by this service
    PENDING = "pending"


# Allowed forward moves; re-approving an approved profile is a no-op
_TRANSITIONS = {
    ProfileStatus.PENDING_PAYMENT: {ProfileStatus.APPROVED},
    ProfileStatus.PENDING: {ProfileStatus.APPROVED},
    ProfileStatus.APPROVED: set(),
}


def can_transition(current: ProfileStatus, target: ProfileStatus) -> bool:
    """Return True if a profile may move from ``current`` to ``target``."""
    return current == target or target in _TRANSITIONS.get(current, set())


class ProfileModel(BaseModel):
    """MongoDB model for a profile record."""

    model_config = ConfigDict(populate_by_name=True)

    # MongoDB specific fields
    id: Optional[str] = Field(None, alias="_id", description="MongoDB document ID")

    name: str = Field(..., description="Display name")
    description: str = Field(..., description="Short profile description")
    platform: str = Field(..., description="Social platform label")
    link: str = Field(..., description="External profile URL")
    email: Optional[str] = Field(None, description="Submitter e-mail used to match payment")
    photo_url: str = Field(..., alias="photoUrl", description="Public photo URL")
    status: ProfileStatus = Field(
        default=ProfileStatus.PENDING_PAYMENT, description="Publication status"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp",
    )

    @field_validator("id", mode="before")
    @classmethod
    def convert_objectid_to_str(cls, v):
        """Convert MongoDB ObjectId to string."""
        if isinstance(v, ObjectId):
            return str(v)
        return v


class ProfileCreateModel(BaseModel):
    """Model for inserting a new profile record."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Display name")
    description: str = Field(..., description="Short profile description")
    platform: str = Field(..., description="Social platform label")
    link: str = Field(..., description="External profile URL")
    email: Optional[str] = Field(None, description="Submitter e-mail")
    photo_url: str = Field(..., alias="photoUrl", description="Public photo URL")
    status: ProfileStatus = Field(
        default=ProfileStatus.PENDING_PAYMENT, description="Initial status"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp",
    )

    def to_document(self) -> dict:
        """Document shape stored in the profiles collection."""
        document = self.model_dump(by_alias=True)
        document["status"] = self.status.value
        return document
