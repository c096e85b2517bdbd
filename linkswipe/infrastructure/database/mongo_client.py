"""
MongoDB client construction.
The client is built once per process by the application lifespan.
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from linkswipe.core.config import get_mongodb_database_name, get_mongodb_url
from linkswipe.core.logging import get_logger

logger = get_logger(__name__)


def create_mongo_client() -> AsyncIOMotorClient:
    """Create the process-wide MongoDB client."""
    client = AsyncIOMotorClient(get_mongodb_url(), tz_aware=True)
    logger.info("MongoDB client created")
    return client


def get_database(client: AsyncIOMotorClient) -> AsyncIOMotorDatabase:
    """Resolve the configured database on a client."""
    return client[get_mongodb_database_name()]
