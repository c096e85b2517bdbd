"""
MongoDB repository for profile records.
"""

from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from linkswipe.core.exceptions import DatabaseError
from linkswipe.core.logging import get_logger
from linkswipe.domain.models.profile import (
    ProfileCreateModel,
    ProfileModel,
    ProfileStatus,
)

logger = get_logger(__name__)


class ProfileRepository:
    """Repository for profile records in MongoDB."""

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initialize the repository.

        Args:
            collection: Profiles collection owned by the process-wide client
        """
        self.collection = collection

    async def create_indexes(self) -> None:
        """Create the indexes used by the gallery and webhook lookups."""
        try:
            await self.collection.create_index(
                [("status", ASCENDING)], name="status_index"
            )
            await self.collection.create_index(
                [("email", ASCENDING)], name="email_index"
            )
            logger.info("Profile indexes created successfully")

        except PyMongoError as e:
            logger.error(f"Failed to create indexes: {e}")
            # The app still works without indexes

    async def create_profile(self, profile: ProfileCreateModel) -> ProfileModel:
        """
        Insert a new profile record.

        Args:
            profile: Profile data to insert

        Returns:
            The stored profile with its assigned ID

        Raises:
            DatabaseError: If the insert fails
        """
        document = profile.to_document()

        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            logger.error(f"Failed to create profile: {e}")
            raise DatabaseError("Failed to save profile") from e

        logger.info(f"Created profile with ID: {result.inserted_id}")
        document["_id"] = result.inserted_id
        return ProfileModel(**document)

    async def get_profile_by_id(self, profile_id: str) -> Optional[ProfileModel]:
        """
        Get a profile by ID.

        Args:
            profile_id: MongoDB ObjectId as string

        Returns:
            Profile model or None if not found
        """
        try:
            object_id = ObjectId(profile_id)
        except (InvalidId, TypeError):
            return None

        try:
            doc = await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Error getting profile by ID {profile_id}: {e}")
            raise DatabaseError("Failed to load profile") from e

        return ProfileModel(**doc) if doc else None

    async def find_first_by_email(self, email: str) -> Optional[ProfileModel]:
        """
        Get the first profile whose e-mail matches.
        Note: If several profiles share the e-mail, which one comes back is
        up to the store.

        Args:
            email: Submitter e-mail

        Returns:
            Profile model or None if not found
        """
        try:
            doc = await self.collection.find_one({"email": email})
        except PyMongoError as e:
            logger.error(f"Error getting profile by email: {e}")
            raise DatabaseError("Failed to look up profile") from e

        return ProfileModel(**doc) if doc else None

    async def update_status(self, profile_id: str, status: ProfileStatus) -> bool:
        """
        Set the status of one profile, leaving every other field untouched.

        Args:
            profile_id: Profile ID
            status: New status

        Returns:
            True if a document matched
        """
        try:
            object_id = ObjectId(profile_id)
        except (InvalidId, TypeError):
            return False

        try:
            result = await self.collection.update_one(
                {"_id": object_id},
                {"$set": {"status": status.value}},
            )
        except PyMongoError as e:
            logger.error(f"Error updating profile {profile_id}: {e}")
            raise DatabaseError("Failed to update profile status") from e

        return result.matched_count > 0

    async def list_by_status(self, status: ProfileStatus) -> List[ProfileModel]:
        """
        Get all profiles with the given status, in store order.

        Args:
            status: Status filter

        Returns:
            List of profile models
        """
        try:
            cursor = self.collection.find({"status": status.value})
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to list profiles: {e}")
            raise DatabaseError("Failed to load profiles") from e

        return [ProfileModel(**doc) for doc in docs]
