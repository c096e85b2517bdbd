from urllib.parse import urlencode

import pytest

from linkswipe.api.services.payment_webhook_service import PaymentWebhookService
from linkswipe.core.config import settings
from linkswipe.core.security import WEBHOOK_SIGNATURE_HEADER, compute_webhook_signature
from linkswipe.domain.models.profile import ProfileStatus

pytestmark = pytest.mark.anyio("asyncio")

WEBHOOK_URL = "/api/v1/webhooks/payment"
FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


def delivery(**fields) -> dict:
    payload = {
        "product_id": "xziod",
        "email": "ada@example.com",
        "seller_id": "seller-1",
        "test_mode": "false",
    }
    payload.update(fields)
    return payload


@pytest.mark.anyio
async def test_matching_payment_approves_profile(async_client, profile_repository):
    """Only the status changes; every other stored field is left as submitted."""
    profile = profile_repository.seed()
    before = dict(profile_repository.get(profile.id))

    response = await async_client.post(WEBHOOK_URL, data=delivery())

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Webhook received and processed successfully!"

    after = profile_repository.get(profile.id)
    assert after["status"] == ProfileStatus.APPROVED.value
    assert {k: v for k, v in after.items() if k != "status"} == {
        k: v for k, v in before.items() if k != "status"
    }


@pytest.mark.anyio
async def test_wrong_product_is_rejected_without_mutation(async_client, profile_repository):
    profile = profile_repository.seed()

    response = await async_client.post(WEBHOOK_URL, data=delivery(product_id="other"))

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid product ID"
    assert body["error_code"] == "INVALID_PRODUCT"
    assert profile_repository.get(profile.id)["status"] == ProfileStatus.PENDING_PAYMENT.value


@pytest.mark.anyio
async def test_missing_product_is_rejected(async_client, profile_repository):
    profile_repository.seed()
    payload = delivery()
    payload.pop("product_id")

    response = await async_client.post(WEBHOOK_URL, data=payload)

    assert response.status_code == 400


@pytest.mark.anyio
async def test_repeat_delivery_is_a_noop(async_client, profile_repository):
    profile = profile_repository.seed()

    first = await async_client.post(WEBHOOK_URL, data=delivery())
    second = await async_client.post(WEBHOOK_URL, data=delivery())

    assert first.status_code == 200
    assert second.status_code == 200
    assert profile_repository.get(profile.id)["status"] == ProfileStatus.APPROVED.value


@pytest.mark.anyio
async def test_unknown_email_returns_not_found(async_client, profile_repository):
    profile = profile_repository.seed()

    response = await async_client.post(WEBHOOK_URL, data=delivery(email="nobody@example.com"))

    assert response.status_code == 404
    assert response.json()["message"] == "Profile not found"
    assert profile_repository.get(profile.id)["status"] == ProfileStatus.PENDING_PAYMENT.value


@pytest.mark.anyio
async def test_blank_email_returns_not_found(async_client, profile_repository):
    profile_repository.seed(email=None)

    response = await async_client.post(WEBHOOK_URL, data=delivery(email=""))

    assert response.status_code == 404


@pytest.mark.anyio
async def test_first_profile_with_email_is_approved(async_client, profile_repository):
    """Duplicate e-mails resolve to the earliest stored profile only."""
    first = profile_repository.seed(name="First")
    second = profile_repository.seed(name="Second")

    response = await async_client.post(WEBHOOK_URL, data=delivery())

    assert response.status_code == 200
    assert profile_repository.get(first.id)["status"] == ProfileStatus.APPROVED.value
    assert profile_repository.get(second.id)["status"] == ProfileStatus.PENDING_PAYMENT.value


@pytest.mark.anyio
async def test_test_mode_delivery_still_approves(async_client, profile_repository):
    profile = profile_repository.seed()

    response = await async_client.post(WEBHOOK_URL, data=delivery(test_mode="true"))

    assert response.status_code == 200
    assert profile_repository.get(profile.id)["status"] == ProfileStatus.APPROVED.value


@pytest.mark.anyio
async def test_signature_required_when_secret_configured(
    async_client, profile_repository, monkeypatch
):
    monkeypatch.setattr(settings, "WEBHOOK_SHARED_SECRET", "s3cret")
    profile = profile_repository.seed()
    body = urlencode(delivery()).encode()

    unsigned = await async_client.post(WEBHOOK_URL, content=body, headers=FORM_HEADERS)
    forged = await async_client.post(
        WEBHOOK_URL,
        content=body,
        headers={**FORM_HEADERS, WEBHOOK_SIGNATURE_HEADER: "deadbeef"},
    )

    assert unsigned.status_code == 401
    assert forged.status_code == 401
    assert profile_repository.get(profile.id)["status"] == ProfileStatus.PENDING_PAYMENT.value

    signed = await async_client.post(
        WEBHOOK_URL,
        content=body,
        headers={
            **FORM_HEADERS,
            WEBHOOK_SIGNATURE_HEADER: "sha256=" + compute_webhook_signature(body, "s3cret"),
        },
    )

    assert signed.status_code == 200
    assert profile_repository.get(profile.id)["status"] == ProfileStatus.APPROVED.value


@pytest.mark.anyio
async def test_unexpected_error_returns_static_message(
    async_client, profile_repository, monkeypatch
):
    profile_repository.seed()

    async def boom(self, payload):
        raise RuntimeError("cursor id 42 not found")

    monkeypatch.setattr(PaymentWebhookService, "approve_payment", boom)

    response = await async_client.post(WEBHOOK_URL, data=delivery())

    assert response.status_code == 500
    assert response.json()["message"] == "Internal Server Error"
    assert "cursor id" not in response.text


@pytest.mark.anyio
async def test_non_ascii_signature_is_unauthorized(async_client, profile_repository, monkeypatch):
    """A latin-1 signature header is refused like any other bad signature."""
    monkeypatch.setattr(settings, "WEBHOOK_SHARED_SECRET", "s3cret")
    profile = profile_repository.seed()
    body = urlencode(delivery()).encode()

    response = await async_client.post(
        WEBHOOK_URL,
        content=body,
        headers={**FORM_HEADERS, WEBHOOK_SIGNATURE_HEADER: "café".encode("latin-1")},
    )

    assert response.status_code == 401
    assert response.json()["error_code"] == "WEBHOOK_SIGNATURE"
    assert profile_repository.get(profile.id)["status"] == ProfileStatus.PENDING_PAYMENT.value
