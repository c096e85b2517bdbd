"""
Security utilities for the LinkSwipe backend.
Handles shared-secret verification of payment webhook payloads.
"""

import hashlib
import hmac
from typing import Optional

from linkswipe.core.exceptions import WebhookSignatureError
from linkswipe.core.logging import get_logger

logger = get_logger(__name__)

WEBHOOK_SIGNATURE_HEADER = "X-Webhook-Signature"

_HEX_DIGITS = frozenset("0123456789abcdef")


def compute_webhook_signature(body: bytes, secret: str) -> str:
    """
    Compute the hex HMAC-SHA256 of a raw webhook body.

    Args:
        body: Raw request body as received
        secret: Shared secret configured with the payment provider

    Returns:
        str: Lower-case hex digest
    """
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


def verify_webhook_signature(
    body: bytes,
    signature: Optional[str],
    secret: Optional[str],
) -> bool:
    """
    Verify a webhook body against its signature header.

    Verification is skipped when no secret is configured, which leaves the
    product identifier as the only check on the payload.

    Args:
        body: Raw request body
        signature: Value of the signature header, if any
        secret: Configured shared secret, if any

    Returns:
        bool: True when verification passed or was skipped

    Raises:
        WebhookSignatureError: If a secret is configured and the signature is
            missing or does not match
    """
    if not secret:
        return True

    if not signature:
        raise WebhookSignatureError("Missing webhook signature")

    candidate = signature.strip().lower()
    if candidate.startswith("sha256="):
        candidate = candidate[len("sha256="):]

    # compare_digest refuses non-ASCII str, so anything but hex is rejected here
    if not candidate or any(ch not in _HEX_DIGITS for ch in candidate):
        logger.warning("Webhook signature is not a hex digest")
        raise WebhookSignatureError()

    expected = compute_webhook_signature(body, secret)
    if not hmac.compare_digest(candidate, expected):
        logger.warning("Webhook signature mismatch")
        raise WebhookSignatureError()

    return True
