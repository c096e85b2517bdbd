import os
import sys
from typing import Dict, List, Optional

import pytest
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from asgi_lifespan import LifespanManager

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
os.environ.setdefault("ANYIO_BACKEND", "asyncio")
os.environ.setdefault("MONGO_CREATE_INDEXES", "false")
os.environ.setdefault("WEBHOOK_SHARED_SECRET", "")

from linkswipe.main import app  # noqa: E402
from linkswipe.api.deps.resources import get_blob_storage, get_profile_repository  # noqa: E402
from linkswipe.core.exceptions import DatabaseError, StorageError  # noqa: E402
from linkswipe.domain.models.profile import (  # noqa: E402
    ProfileCreateModel,
    ProfileModel,
    ProfileStatus,
)
from linkswipe.infrastructure.storage.blob_storage_service import build_photo_key  # noqa: E402


class FakeProfileRepository:
    """In-memory stand-in for ProfileRepository keeping insertion order."""

    def __init__(self):
        self.documents: Dict[str, dict] = {}
        self.fail_on_create = False

    def seed(self, status: ProfileStatus = ProfileStatus.PENDING_PAYMENT, **fields) -> ProfileModel:
        data = {
            "name": "Ada",
            "description": "Math and engines",
            "platform": "Instagram",
            "link": "https://instagram.com/ada",
            "email": "ada@example.com",
            "photo_url": "https://blobs.test/profiles/ada.png_1",
            "status": status,
        }
        data.update(fields)
        document = ProfileCreateModel(**data).to_document()
        document["_id"] = ObjectId()
        self.documents[str(document["_id"])] = document
        return ProfileModel(**document)

    def get(self, profile_id: str) -> dict:
        return self.documents[profile_id]

    async def create_profile(self, profile: ProfileCreateModel) -> ProfileModel:
        if self.fail_on_create:
            raise DatabaseError("Failed to save profile")
        document = profile.to_document()
        document["_id"] = ObjectId()
        self.documents[str(document["_id"])] = document
        return ProfileModel(**document)

    async def get_profile_by_id(self, profile_id: str) -> Optional[ProfileModel]:
        document = self.documents.get(profile_id)
        return ProfileModel(**document) if document else None

    async def find_first_by_email(self, email: str) -> Optional[ProfileModel]:
        for document in self.documents.values():
            if document.get("email") == email:
                return ProfileModel(**document)
        return None

    async def update_status(self, profile_id: str, status: ProfileStatus) -> bool:
        document = self.documents.get(profile_id)
        if document is None:
            return False
        document["status"] = status.value
        return True

    async def list_by_status(self, status: ProfileStatus) -> List[ProfileModel]:
        return [
            ProfileModel(**document)
            for document in self.documents.values()
            if document["status"] == status.value
        ]


class FakeBlobStorage:
    """Records uploads instead of sending them."""

    def __init__(self):
        self.uploads: List[dict] = []
        self.fail = False

    async def upload_profile_photo(self, filename: str, data: bytes, content_type: str) -> str:
        if self.fail:
            raise StorageError("Photo upload failed")
        key = build_photo_key(filename)
        self.uploads.append({"key": key, "data": data, "content_type": content_type})
        return f"https://blobs.test/{key}"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def profile_repository() -> FakeProfileRepository:
    return FakeProfileRepository()


@pytest.fixture
def blob_storage() -> FakeBlobStorage:
    return FakeBlobStorage()


@pytest.fixture(autouse=True)
def override_resources(profile_repository, blob_storage):
    """
    Swap the store and storage dependencies for in-memory fakes so
    handlers run without MongoDB or an object store.
    """
    app.dependency_overrides[get_profile_repository] = lambda: profile_repository
    app.dependency_overrides[get_blob_storage] = lambda: blob_storage
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client():
    """Shared HTTPX async client with FastAPI lifespan handling."""
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
