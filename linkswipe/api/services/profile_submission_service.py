"""
Profile Submission Service Layer.
Validates submitted profiles, stores their photo and records them as awaiting payment.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlparse

from linkswipe.api.dto.profile_dto import ProfileSubmissionDTO
from linkswipe.core.config import settings
from linkswipe.core.exceptions import (
    DisallowedPlatformError,
    MalformedLinkError,
    MissingFieldsError,
    PhotoTooLargeError,
    ValidationError,
)
from linkswipe.core.logging import get_logger, log_profile_submission
from linkswipe.domain.models.profile import (
    ProfileCreateModel,
    ProfileModel,
    ProfileStatus,
)
from linkswipe.domain.repositories.profile_repository import ProfileRepository
from linkswipe.infrastructure.storage.blob_storage_service import BlobStorageService

logger = get_logger(__name__)

REQUIRED_TEXT_FIELDS = ("name", "description", "link", "platform")
PHOTO_FIELD = "photoFile"


@dataclass
class PhotoUpload:
    """Photo file received with a submission."""

    filename: str
    content_type: str
    data: bytes


def find_missing_fields(
    fields: Dict[str, Optional[str]],
    photo: Optional[PhotoUpload],
    require_email: bool,
) -> List[str]:
    """Names of required fields that are absent or blank, in form order."""
    required = list(REQUIRED_TEXT_FIELDS)
    if require_email:
        required.insert(1, "email")

    missing = [name for name in required if not (fields.get(name) or "").strip()]
    if photo is None or (not photo.filename and not photo.data):
        missing.append(PHOTO_FIELD)
    return missing


def host_matches(host: str, allowed_domains: Iterable[str]) -> bool:
    """True if ``host`` is one of the domains or a subdomain of one."""
    host = host.lower().rstrip(".")
    return any(host == domain or host.endswith("." + domain) for domain in allowed_domains)


def validate_profile_link(
    link: str,
    allowed_domains: Iterable[str],
    enforce_allowlist: bool,
) -> str:
    """
    Check a profile link.

    Args:
        link: Submitted URL
        allowed_domains: Domains links may point at
        enforce_allowlist: Whether the domain allow-list applies

    Returns:
        The link, stripped of surrounding whitespace

    Raises:
        MalformedLinkError: If the link is not an absolute http(s) URL
        DisallowedPlatformError: If the host is not allow-listed
    """
    link = link.strip()
    lowered = link.lower()
    if not (lowered.startswith("http://") or lowered.startswith("https://")):
        raise MalformedLinkError(link)

    try:
        host = urlparse(link).hostname
    except ValueError as e:
        raise MalformedLinkError(link) from e
    if not host:
        raise MalformedLinkError(link)

    if enforce_allowlist and not host_matches(host, allowed_domains):
        raise DisallowedPlatformError(host, {"allowed_domains": list(allowed_domains)})

    return link


class ProfileSubmissionService:
    """Service class for profile submissions."""

    def __init__(self, repository: ProfileRepository, storage: BlobStorageService):
        """Initialize submission service with its collaborators."""
        self.repository = repository
        self.storage = storage

    def validate(
        self, fields: Dict[str, Optional[str]], photo: Optional[PhotoUpload]
    ) -> ProfileSubmissionDTO:
        """
        Validate a raw submission.

        Args:
            fields: Text form fields
            photo: Uploaded photo, if any

        Returns:
            ProfileSubmissionDTO with cleaned values

        Raises:
            ValidationError: If the submission is incomplete or non-conforming
        """
        missing = find_missing_fields(fields, photo, settings.REQUIRE_SUBMITTER_EMAIL)
        if missing:
            raise MissingFieldsError(missing)

        link = validate_profile_link(
            fields["link"],
            settings.LINK_ALLOWED_DOMAINS,
            settings.ENFORCE_LINK_ALLOWLIST,
        )

        if not photo.data:
            raise ValidationError("Photo is empty", {"field": PHOTO_FIELD})
        if not (photo.content_type or "").startswith("image/"):
            raise ValidationError(
                "Photo must be an image", {"content_type": photo.content_type}
            )
        if len(photo.data) > settings.PHOTO_MAX_SIZE:
            raise PhotoTooLargeError(len(photo.data), settings.PHOTO_MAX_SIZE)

        email = (fields.get("email") or "").strip() or None
        return ProfileSubmissionDTO(
            name=fields["name"].strip(),
            description=fields["description"].strip(),
            link=link,
            platform=fields["platform"].strip(),
            email=email,
        )

    async def submit(
        self, fields: Dict[str, Optional[str]], photo: Optional[PhotoUpload]
    ) -> ProfileModel:
        """
        Submit a new profile.

        Steps:
        1. Validate fields, link and photo
        2. Upload photo to blob storage
        3. Insert the profile as pending payment

        An upload failure aborts before the insert. An insert failure after a
        successful upload leaves the stored photo unreferenced.

        Args:
            fields: Text form fields
            photo: Uploaded photo

        Returns:
            The stored profile
        """
        submission = self.validate(fields, photo)

        photo_url = await self.storage.upload_profile_photo(
            photo.filename or "photo", photo.data, photo.content_type
        )

        profile = await self.repository.create_profile(
            ProfileCreateModel(
                name=submission.name,
                description=submission.description,
                platform=submission.platform,
                link=submission.link,
                email=submission.email,
                photo_url=photo_url,
                status=ProfileStatus.PENDING_PAYMENT,
            )
        )

        log_profile_submission(
            "submit",
            profile_id=profile.id,
            email=profile.email,
            platform=profile.platform,
        )
        return profile
