from datetime import datetime, timezone

import pytest

from linkswipe.api.services.profile_submission_service import ProfileSubmissionService
from linkswipe.core.config import settings
from linkswipe.domain.models.profile import ProfileStatus

pytestmark = pytest.mark.anyio("asyncio")

SUBMIT_URL = "/api/v1/profiles/submit"

FORM = {
    "name": "Grace",
    "email": "grace@example.com",
    "description": "Compilers and cobol",
    "link": "https://www.instagram.com/grace",
    "platform": "Instagram",
}
PHOTO = ("grace.png", b"\x89PNG\r\n\x1a\nfake-image-bytes", "image/png")


@pytest.mark.anyio
async def test_submission_creates_single_pending_profile(
    async_client, profile_repository, blob_storage
):
    """A complete submission stores the photo and one pending_payment record."""
    before = datetime.now(timezone.utc)

    response = await async_client.post(SUBMIT_URL, data=FORM, files={"photoFile": PHOTO})

    after = datetime.now(timezone.utc)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Profile submitted successfully!"
    assert body["payment_url"] == settings.PAYMENT_CHECKOUT_URL

    assert len(profile_repository.documents) == 1
    document = next(iter(profile_repository.documents.values()))
    assert document["status"] == ProfileStatus.PENDING_PAYMENT.value
    assert document["name"] == "Grace"
    assert document["email"] == "grace@example.com"
    assert document["photoUrl"].startswith("https://blobs.test/profiles/grace.png_")
    assert before <= document["timestamp"] <= after

    assert len(blob_storage.uploads) == 1
    assert blob_storage.uploads[0]["content_type"] == "image/png"
    assert blob_storage.uploads[0]["data"] == PHOTO[1]


@pytest.mark.anyio
@pytest.mark.parametrize(
    "missing", ["name", "email", "description", "link", "platform", "photoFile"]
)
async def test_missing_field_is_rejected_without_record(
    async_client, profile_repository, blob_storage, missing
):
    """Dropping any required field yields 400 and creates nothing."""
    data = {key: value for key, value in FORM.items() if key != missing}
    files = None if missing == "photoFile" else {"photoFile": PHOTO}

    response = await async_client.post(SUBMIT_URL, data=data, files=files)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "VALIDATION_ERROR"
    assert missing in body["message"]
    assert profile_repository.documents == {}
    assert blob_storage.uploads == []


@pytest.mark.anyio
async def test_blank_field_counts_as_missing(async_client, profile_repository):
    response = await async_client.post(
        SUBMIT_URL, data={**FORM, "name": "   "}, files={"photoFile": PHOTO}
    )

    assert response.status_code == 400
    assert profile_repository.documents == {}


@pytest.mark.anyio
async def test_email_optional_when_not_required(
    async_client, profile_repository, monkeypatch
):
    monkeypatch.setattr(settings, "REQUIRE_SUBMITTER_EMAIL", False)
    data = {key: value for key, value in FORM.items() if key != "email"}

    response = await async_client.post(SUBMIT_URL, data=data, files={"photoFile": PHOTO})

    assert response.status_code == 200
    document = next(iter(profile_repository.documents.values()))
    assert document["email"] is None


@pytest.mark.anyio
async def test_disallowed_domain_is_rejected(async_client, profile_repository, blob_storage):
    """Links outside the allow-list fail even when everything else is valid."""
    response = await async_client.post(
        SUBMIT_URL,
        data={**FORM, "link": "https://example.com/grace"},
        files={"photoFile": PHOTO},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "DISALLOWED_PLATFORM"
    assert "Disallowed platform" in body["message"]
    assert profile_repository.documents == {}
    assert blob_storage.uploads == []


@pytest.mark.anyio
async def test_malformed_link_is_reported_separately(async_client, profile_repository):
    response = await async_client.post(
        SUBMIT_URL,
        data={**FORM, "link": "instagram.com/grace"},
        files={"photoFile": PHOTO},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error_code"] == "MALFORMED_LINK"
    assert "Malformed URL" in body["message"]
    assert profile_repository.documents == {}


@pytest.mark.anyio
async def test_allowlist_can_be_disabled(async_client, profile_repository, monkeypatch):
    monkeypatch.setattr(settings, "ENFORCE_LINK_ALLOWLIST", False)

    response = await async_client.post(
        SUBMIT_URL,
        data={**FORM, "link": "https://youtube.com/@grace", "platform": "YouTube"},
        files={"photoFile": PHOTO},
    )

    assert response.status_code == 200
    assert len(profile_repository.documents) == 1


@pytest.mark.anyio
async def test_non_image_upload_is_rejected(async_client, profile_repository):
    response = await async_client.post(
        SUBMIT_URL,
        data=FORM,
        files={"photoFile": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Photo must be an image"
    assert profile_repository.documents == {}


@pytest.mark.anyio
async def test_oversized_photo_is_rejected(async_client, profile_repository, monkeypatch):
    """The handler stops reading one byte past the limit."""
    monkeypatch.setattr(settings, "PHOTO_MAX_SIZE", 4)
    received = []
    original_validate = ProfileSubmissionService.validate

    def recording_validate(self, fields, photo):
        received.append(len(photo.data))
        return original_validate(self, fields, photo)

    monkeypatch.setattr(ProfileSubmissionService, "validate", recording_validate)

    response = await async_client.post(SUBMIT_URL, data=FORM, files={"photoFile": PHOTO})

    assert response.status_code == 413
    assert response.json()["error_code"] == "PHOTO_TOO_LARGE"
    assert received == [5]
    assert profile_repository.documents == {}


@pytest.mark.anyio
async def test_upload_failure_aborts_before_database_write(
    async_client, profile_repository, blob_storage
):
    blob_storage.fail = True

    response = await async_client.post(SUBMIT_URL, data=FORM, files={"photoFile": PHOTO})

    assert response.status_code == 500
    assert response.json()["error_code"] == "STORAGE_ERROR"
    assert profile_repository.documents == {}


@pytest.mark.anyio
async def test_database_failure_leaves_uploaded_photo(
    async_client, profile_repository, blob_storage
):
    """The upload is not rolled back when the insert fails."""
    profile_repository.fail_on_create = True

    response = await async_client.post(SUBMIT_URL, data=FORM, files={"photoFile": PHOTO})

    assert response.status_code == 500
    assert response.json()["error_code"] == "DATABASE_ERROR"
    assert len(blob_storage.uploads) == 1


@pytest.mark.anyio
async def test_unexpected_error_returns_static_message(
    async_client, profile_repository, monkeypatch
):
    async def boom(profile):
        raise RuntimeError("connection reset by peer")

    monkeypatch.setattr(profile_repository, "create_profile", boom)

    response = await async_client.post(SUBMIT_URL, data=FORM, files={"photoFile": PHOTO})

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Internal Server Error"
    assert "connection reset" not in response.text
