"""
DTOs (Data Transfer Objects) for profile and payment endpoints.
Contains request and response models for submission, approval and gallery reads.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from linkswipe.domain.models.profile import ProfileModel


# Request DTOs
class ProfileSubmissionDTO(BaseModel):
    """Validated submission fields, photo excluded."""

    name: str = Field(..., description="Display name")
    description: str = Field(..., description="Short profile description")
    link: str = Field(..., description="External profile URL")
    platform: str = Field(..., description="Social platform label")
    email: Optional[str] = Field(None, description="Submitter e-mail")


class PaymentWebhookDTO(BaseModel):
    """Fields read from a payment provider ping."""

    product_id: Optional[str] = Field(None, description="Purchased product identifier")
    email: Optional[str] = Field(None, description="Payer e-mail")
    seller_id: Optional[str] = Field(None, description="Seller identifier")
    test_mode: bool = Field(False, description="Provider test purchase flag")

    @classmethod
    def from_form(cls, form: Dict[str, Any]) -> "PaymentWebhookDTO":
        """Build from form fields; the provider sends test_mode as a string."""
        return cls(
            product_id=form.get("product_id"),
            email=form.get("email"),
            seller_id=form.get("seller_id"),
            test_mode=str(form.get("test_mode", "")).lower() == "true",
        )


# Response DTOs
class MessageResponseDTO(BaseModel):
    """Response DTO carrying a status message."""

    success: bool = Field(..., description="Operation success status")
    message: str = Field(..., description="Response message")
    error_code: Optional[str] = Field(None, description="Error code on failure")


class ProfileSubmissionResponseDTO(MessageResponseDTO):
    """Response DTO for profile submission."""

    payment_url: Optional[str] = Field(
        None, description="Checkout page the client should redirect to"
    )


class GalleryProfileDTO(BaseModel):
    """Public view of an approved profile. E-mail is never exposed."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Profile ID")
    name: str = Field(..., description="Display name")
    description: str = Field(..., description="Short profile description")
    platform: str = Field(..., description="Social platform label")
    link: str = Field(..., description="External profile URL")
    photo_url: str = Field(..., alias="photoUrl", description="Public photo URL")
    timestamp: Optional[datetime] = Field(None, description="Creation timestamp")

    @classmethod
    def from_model(cls, profile: ProfileModel) -> "GalleryProfileDTO":
        return cls(
            id=profile.id or "",
            name=profile.name,
            description=profile.description,
            platform=profile.platform,
            link=profile.link,
            photo_url=profile.photo_url,
            timestamp=profile.timestamp,
        )


class GalleryResponseDTO(BaseModel):
    """Response DTO for the approved profile list."""

    success: bool = Field(..., description="Operation success status")
    message: str = Field(..., description="Response message")
    data: List[GalleryProfileDTO] = Field(..., description="Approved profiles")
