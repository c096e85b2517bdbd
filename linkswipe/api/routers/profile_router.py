"""
Profile Router for the LinkSwipe backend.
Handles profile submission and the approved profile read path.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from linkswipe.api.deps.resources import get_gallery_service, get_submission_service
from linkswipe.api.dto.profile_dto import (
    GalleryProfileDTO,
    GalleryResponseDTO,
    ProfileSubmissionResponseDTO,
)
from linkswipe.api.responses import exception_response, internal_error_response
from linkswipe.api.services.gallery_service import GalleryService
from linkswipe.api.services.profile_submission_service import (
    PhotoUpload,
    ProfileSubmissionService,
)
from linkswipe.core.config import settings
from linkswipe.core.exceptions import LinkSwipeException, ValidationError
from linkswipe.core.logging import get_logger, log_profile_submission

logger = get_logger(__name__)

# Create router
router = APIRouter()


@router.post("/submit", response_model=ProfileSubmissionResponseDTO)
async def submit_profile(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    link: Optional[str] = Form(None),
    platform: Optional[str] = Form(None),
    photo_file: Optional[UploadFile] = File(None, alias="photoFile"),
    service: ProfileSubmissionService = Depends(get_submission_service),
):
    """
    Submit a profile for the gallery.

    This endpoint:
    1. Validates the form fields and profile link
    2. Uploads the photo to blob storage
    3. Stores the profile as pending payment
    4. Returns the checkout URL the client redirects to

    Returns:
        ProfileSubmissionResponseDTO with a confirmation message
    """
    fields = {
        "name": name,
        "email": email,
        "description": description,
        "link": link,
        "platform": platform,
    }

    try:
        photo = None
        if photo_file is not None:
            photo = PhotoUpload(
                filename=photo_file.filename or "",
                content_type=photo_file.content_type or "",
                # One byte past the limit is enough for the size check to fire
                data=await photo_file.read(settings.PHOTO_MAX_SIZE + 1),
            )

        await service.submit(fields, photo)

        return ProfileSubmissionResponseDTO(
            success=True,
            message="Profile submitted successfully!",
            payment_url=settings.PAYMENT_CHECKOUT_URL,
        )

    except ValidationError as e:
        log_profile_submission(
            "reject", email=email, platform=platform, status="invalid", reason=e.error_code
        )
        return exception_response(e)
    except LinkSwipeException as e:
        logger.error(f"Error submitting profile: {e.message}", error_code=e.error_code)
        return exception_response(e)
    except Exception as e:
        return internal_error_response(e, {"operation": "submit_profile"})


@router.get("/approved", response_model=GalleryResponseDTO)
async def get_approved_profiles(
    service: GalleryService = Depends(get_gallery_service),
):
    """
    Get all approved profiles in store order.

    Returns:
        GalleryResponseDTO with the approved profiles
    """
    try:
        profiles = await service.get_approved_profiles()
        return GalleryResponseDTO(
            success=True,
            message="Profiles retrieved successfully",
            data=[GalleryProfileDTO.from_model(profile) for profile in profiles],
        )

    except LinkSwipeException as e:
        return exception_response(e)
    except Exception as e:
        return internal_error_response(e, {"operation": "get_approved_profiles"})
