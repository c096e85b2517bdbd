"""
Configuration management for the LinkSwipe backend.
Handles environment variables and application settings for profile publishing.
"""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "LinkSwipe"
    ENVIRONMENT: str = "development"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS
    ALLOWED_ORIGINS: Annotated[List[str], NoDecode] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "https://linkswipe.app",
        "https://www.linkswipe.app",
    ]
    ALLOWED_HOSTS: Annotated[List[str], NoDecode] = [
        "localhost",
        "linkswipe.app",
        "www.linkswipe.app",
    ]

    # Database - MongoDB
    MONGODB_URL: str = "mongodb://localhost:27017"
    MONGODB_DATABASE: str = "linkswipe"
    MONGODB_USERNAME: Optional[str] = None
    MONGODB_PASSWORD: Optional[str] = None

    # MongoDB Environment Variables (from .env)
    MONGO_URI: Optional[str] = None
    MONGO_DB_NAME: Optional[str] = None

    PROFILES_COLLECTION: str = "profiles"
    MONGO_CREATE_INDEXES: bool = True

    # Blob storage (photo uploads)
    BLOB_STORAGE_UPLOAD_URL: str = "http://localhost:9000/linkswipe"
    BLOB_STORAGE_PUBLIC_URL: str = "http://localhost:9000/linkswipe"
    BLOB_STORAGE_TOKEN: Optional[str] = None
    BLOB_STORAGE_TIMEOUT: float = 30.0
    PROFILE_PHOTO_PREFIX: str = "profiles"
    PHOTO_MAX_SIZE: int = 5 * 1024 * 1024  # 5MB

    # Submission rules
    REQUIRE_SUBMITTER_EMAIL: bool = True
    ENFORCE_LINK_ALLOWLIST: bool = True
    LINK_ALLOWED_DOMAINS: Annotated[List[str], NoDecode] = [
        "facebook.com",
        "instagram.com",
        "x.com",
        "twitter.com",
        "tiktok.com",
    ]

    # Payment provider
    PAYMENT_PRODUCT_ID: str = "xziod"
    PAYMENT_CHECKOUT_URL: str = "https://linkswipe.gumroad.com/l/xziod"
    PAYMENT_PRICE_LABEL: str = "$10"
    # Unset means webhook payloads are accepted without a signature
    WEBHOOK_SHARED_SECRET: Optional[str] = None

    # Legal
    CONTACT_EMAIL: str = "llinkswipe@gmail.com"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    @field_validator(
        "ALLOWED_ORIGINS", "ALLOWED_HOSTS", "LINK_ALLOWED_DOMAINS", mode="before"
    )
    @classmethod
    def parse_comma_separated(cls, v):
        """Parse list settings from a comma separated string or list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("LINK_ALLOWED_DOMAINS")
    @classmethod
    def normalize_domains(cls, v):
        """Lower-case allow-listed domains and strip leading dots."""
        return [domain.lower().lstrip(".") for domain in v]

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed_envs = ["development", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of {allowed_envs}")
        return v

    def get_effective_cors_origins(self) -> List[str]:
        """
        Get effective CORS origins based on environment.
        Local development origins are only added outside production.
        """
        origins = list(self.ALLOWED_ORIGINS)

        if self.ENVIRONMENT != "production":
            for port in [3000, 5173, 8000]:
                origin = f"http://localhost:{port}"
                if origin not in origins:
                    origins.append(origin)

        return origins

    def get_feature_flags(self) -> Dict[str, Any]:
        """Feature switches reported by the health endpoint."""
        return {
            "link_allowlist": self.ENFORCE_LINK_ALLOWLIST,
            "submitter_email_required": self.REQUIRE_SUBMITTER_EMAIL,
            "webhook_signature": bool(self.WEBHOOK_SHARED_SECRET),
            "blob_storage": bool(self.BLOB_STORAGE_UPLOAD_URL),
        }

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Create global settings instance
settings = Settings()


def get_mongodb_url() -> str:
    """
    Get MongoDB connection URL with authentication if credentials are provided.

    Returns:
        str: MongoDB connection URL
    """
    if settings.MONGO_URI:
        return settings.MONGO_URI

    if settings.MONGODB_USERNAME and settings.MONGODB_PASSWORD:
        base_url = settings.MONGODB_URL.replace("mongodb://", "")
        if "@" not in base_url:
            return f"mongodb://{settings.MONGODB_USERNAME}:{settings.MONGODB_PASSWORD}@{base_url}"

    return settings.MONGODB_URL


def get_mongodb_database_name() -> str:
    """
    Get MongoDB database name.

    Returns:
        str: MongoDB database name
    """
    if settings.MONGO_DB_NAME:
        return settings.MONGO_DB_NAME

    return settings.MONGODB_DATABASE


def is_production() -> bool:
    """Check if running in production environment."""
    return settings.ENVIRONMENT == "production"


def is_development() -> bool:
    """Check if running in development environment."""
    return settings.ENVIRONMENT == "development"
