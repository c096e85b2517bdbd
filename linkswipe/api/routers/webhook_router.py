"""
Webhook Router for the LinkSwipe backend.
Receives payment provider pings and approves the matching profile.
"""

from fastapi import APIRouter, Depends, Request

from linkswipe.api.deps.resources import get_payment_webhook_service
from linkswipe.api.dto.profile_dto import MessageResponseDTO, PaymentWebhookDTO
from linkswipe.api.responses import exception_response, internal_error_response
from linkswipe.api.services.payment_webhook_service import PaymentWebhookService
from linkswipe.core.config import settings
from linkswipe.core.exceptions import LinkSwipeException, WebhookSignatureError
from linkswipe.core.logging import get_logger, log_payment_webhook
from linkswipe.core.security import WEBHOOK_SIGNATURE_HEADER, verify_webhook_signature

logger = get_logger(__name__)

# Create router
router = APIRouter()


@router.post("/payment", response_model=MessageResponseDTO)
async def payment_webhook(
    request: Request,
    service: PaymentWebhookService = Depends(get_payment_webhook_service),
):
    """
    Handle a payment provider ping.

    The payload is form encoded and carries at least ``product_id`` and
    ``email``; ``seller_id`` and ``test_mode`` are accepted but play no part
    in the decision. Failed deliveries are not queued or retried here.

    Returns:
        MessageResponseDTO with the processing result
    """
    try:
        body = await request.body()
        verify_webhook_signature(
            body,
            request.headers.get(WEBHOOK_SIGNATURE_HEADER),
            settings.WEBHOOK_SHARED_SECRET,
        )

        form = await request.form()
        payload = PaymentWebhookDTO.from_form(dict(form))

        profile, changed = await service.approve_payment(payload)
        logger.info(f"Profile {profile.id} for {payload.email} has been approved (changed={changed})")

        return MessageResponseDTO(
            success=True,
            message="Webhook received and processed successfully!",
        )

    except WebhookSignatureError as e:
        log_payment_webhook("bad_signature")
        return exception_response(e)
    except LinkSwipeException as e:
        return exception_response(e)
    except Exception as e:
        return internal_error_response(e, {"operation": "payment_webhook"})
