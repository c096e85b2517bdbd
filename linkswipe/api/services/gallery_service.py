"""
Gallery Service Layer.
Loads approved profiles for the public card deck.
"""

from typing import List

from linkswipe.core.logging import get_logger
from linkswipe.domain.models.profile import ProfileModel, ProfileStatus
from linkswipe.domain.models.swipe import SwipeDeck
from linkswipe.domain.repositories.profile_repository import ProfileRepository

logger = get_logger(__name__)


class GalleryService:
    """Service class for the public gallery."""

    def __init__(self, repository: ProfileRepository):
        self.repository = repository

    async def get_approved_profiles(self) -> List[ProfileModel]:
        """Approved profiles in the order the store returns them."""
        profiles = await self.repository.list_by_status(ProfileStatus.APPROVED)
        logger.info(f"Retrieved {len(profiles)} approved profiles")
        return profiles

    async def build_deck(self) -> SwipeDeck:
        """Fresh deck positioned at the first approved profile."""
        return SwipeDeck.from_profiles(await self.get_approved_profiles())
