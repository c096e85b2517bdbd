"""
Payment Webhook Service Layer.
Approves a pending profile once the payment provider reports a purchase.
"""

from typing import Tuple

from linkswipe.api.dto.profile_dto import PaymentWebhookDTO
from linkswipe.core.config import settings
from linkswipe.core.exceptions import (
    InvalidProductError,
    InvalidStatusTransitionError,
    ProfileNotFoundError,
)
from linkswipe.core.logging import get_logger, log_payment_webhook
from linkswipe.domain.models.profile import (
    ProfileModel,
    ProfileStatus,
    can_transition,
)
from linkswipe.domain.repositories.profile_repository import ProfileRepository

logger = get_logger(__name__)


class PaymentWebhookService:
    """Service class for payment confirmations."""

    def __init__(self, repository: ProfileRepository):
        """Initialize webhook service."""
        self.repository = repository

    async def approve_payment(
        self, payload: PaymentWebhookDTO
    ) -> Tuple[ProfileModel, bool]:
        """
        Approve the profile a payment belongs to.

        Steps:
        1. Check the product identifier against the configured product
        2. Find the first profile with the payer e-mail
        3. Set its status to approved

        Args:
            payload: Parsed webhook fields

        Returns:
            Tuple of (approved profile, whether the status changed)

        Raises:
            InvalidProductError: If the product does not match
            ProfileNotFoundError: If no profile has the payer e-mail
        """
        if payload.product_id != settings.PAYMENT_PRODUCT_ID:
            log_payment_webhook(
                "invalid_product",
                product_id=payload.product_id,
                email=payload.email,
                test_mode=payload.test_mode,
            )
            raise InvalidProductError(payload.product_id)

        email = (payload.email or "").strip()
        profile = await self.repository.find_first_by_email(email) if email else None
        if profile is None:
            logger.warning(f"Profile not found for email: {email}")
            log_payment_webhook(
                "not_found",
                product_id=payload.product_id,
                email=email,
                test_mode=payload.test_mode,
            )
            raise ProfileNotFoundError(email)

        if not can_transition(profile.status, ProfileStatus.APPROVED):
            raise InvalidStatusTransitionError(
                profile.status.value, ProfileStatus.APPROVED.value
            )

        if profile.status == ProfileStatus.APPROVED:
            log_payment_webhook(
                "already_approved",
                product_id=payload.product_id,
                email=email,
                profile_id=profile.id,
                test_mode=payload.test_mode,
            )
            return profile, False

        matched = await self.repository.update_status(profile.id, ProfileStatus.APPROVED)
        if not matched:
            # Removed out of band between the lookup and the update
            raise ProfileNotFoundError(email)

        log_payment_webhook(
            "approved",
            product_id=payload.product_id,
            email=email,
            profile_id=profile.id,
            test_mode=payload.test_mode,
            seller_id=payload.seller_id,
        )
        return profile.model_copy(update={"status": ProfileStatus.APPROVED}), True
