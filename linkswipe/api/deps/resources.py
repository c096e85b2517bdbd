"""
Request dependencies for LinkSwipe handlers.
Hands out the process-wide store and storage clients built in the application lifespan.
"""

from fastapi import Depends, Request

from linkswipe.api.services.gallery_service import GalleryService
from linkswipe.api.services.payment_webhook_service import PaymentWebhookService
from linkswipe.api.services.profile_submission_service import ProfileSubmissionService
from linkswipe.core.config import settings
from linkswipe.domain.repositories.profile_repository import ProfileRepository
from linkswipe.infrastructure.storage.blob_storage_service import BlobStorageService


def get_profile_repository(request: Request) -> ProfileRepository:
    """Profile repository bound to the shared database handle."""
    database = request.app.state.mongo_database
    return ProfileRepository(database[settings.PROFILES_COLLECTION])


def get_blob_storage(request: Request) -> BlobStorageService:
    """Blob storage service bound to the shared HTTP client."""
    return request.app.state.blob_storage


def get_submission_service(
    repository: ProfileRepository = Depends(get_profile_repository),
    storage: BlobStorageService = Depends(get_blob_storage),
) -> ProfileSubmissionService:
    return ProfileSubmissionService(repository, storage)


def get_payment_webhook_service(
    repository: ProfileRepository = Depends(get_profile_repository),
) -> PaymentWebhookService:
    return PaymentWebhookService(repository)


def get_gallery_service(
    repository: ProfileRepository = Depends(get_profile_repository),
) -> GalleryService:
    return GalleryService(repository)
