"""
Custom exceptions for the LinkSwipe backend.
Provides structured error handling for profile submission and payment approval.
"""

from typing import Any, Dict, List, Optional

from fastapi import status


class LinkSwipeException(Exception):
    """Base exception for the LinkSwipe backend."""

    def __init__(
        self,
        message: str,
        error_code: str = "LINKSWIPE_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


# Submission validation
class ValidationError(LinkSwipeException):
    """Raised when submitted input is incomplete or non-conforming."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "VALIDATION_ERROR",
    ):
        super().__init__(message, error_code, details)


class MissingFieldsError(ValidationError):
    """Raised when required form fields are absent."""

    def __init__(self, fields: List[str], details: Optional[Dict[str, Any]] = None):
        message = f"Missing required fields: {', '.join(fields)}"
        super().__init__(message, {"fields": fields, **(details or {})})


class MalformedLinkError(ValidationError):
    """Raised when the profile link is not an http(s) URL."""

    def __init__(self, link: str, details: Optional[Dict[str, Any]] = None):
        message = f"Malformed URL: {link}"
        super().__init__(message, details, "MALFORMED_LINK")


class DisallowedPlatformError(ValidationError):
    """Raised when the profile link points outside the allowed platforms."""

    def __init__(self, host: str, details: Optional[Dict[str, Any]] = None):
        message = f"Disallowed platform: {host}"
        super().__init__(message, details, "DISALLOWED_PLATFORM")


class PhotoTooLargeError(LinkSwipeException):
    """Raised when the uploaded photo exceeds the size limit."""

    def __init__(self, size: int, max_size: int, details: Optional[Dict[str, Any]] = None):
        message = f"Photo too large: {size} bytes (max: {max_size})"
        super().__init__(message, "PHOTO_TOO_LARGE", details)


# Payment webhook
class InvalidProductError(LinkSwipeException):
    """Raised when a webhook names a product other than the configured one."""

    def __init__(self, product_id: Optional[str], details: Optional[Dict[str, Any]] = None):
        self.product_id = product_id
        super().__init__("Invalid product ID", "INVALID_PRODUCT", details)


class WebhookSignatureError(LinkSwipeException):
    """Raised when a webhook signature is missing or does not match."""

    def __init__(self, message: str = "Invalid webhook signature", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "WEBHOOK_SIGNATURE", details)


# Profiles
class ProfileNotFoundError(LinkSwipeException):
    """Raised when no profile matches a lookup."""

    def __init__(self, email: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.email = email
        super().__init__("Profile not found", "PROFILE_NOT_FOUND", details)


class InvalidStatusTransitionError(LinkSwipeException):
    """Raised when a profile status would move backwards."""

    def __init__(self, current: str, target: str, details: Optional[Dict[str, Any]] = None):
        message = f"Cannot move profile from {current} to {target}"
        super().__init__(message, "INVALID_STATUS_TRANSITION", details)


# Upstream services
class StorageError(LinkSwipeException):
    """Raised when blob storage operations fail."""

    def __init__(self, message: str = "Storage operation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "STORAGE_ERROR", details)


class DatabaseError(LinkSwipeException):
    """Raised when database operations fail."""

    def __init__(self, message: str = "Database operation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "DATABASE_ERROR", details)


_STATUS_MAPPING = {
    # Submission validation
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "MALFORMED_LINK": status.HTTP_400_BAD_REQUEST,
    "DISALLOWED_PLATFORM": status.HTTP_400_BAD_REQUEST,
    "PHOTO_TOO_LARGE": status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,

    # Payment webhook
    "INVALID_PRODUCT": status.HTTP_400_BAD_REQUEST,
    "WEBHOOK_SIGNATURE": status.HTTP_401_UNAUTHORIZED,

    # Profiles
    "PROFILE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_STATUS_TRANSITION": status.HTTP_409_CONFLICT,

    # Upstream services
    "STORAGE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "DATABASE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_exception_status_code(exc: LinkSwipeException) -> int:
    """
    Get the appropriate HTTP status code for a LinkSwipeException.

    Args:
        exc: LinkSwipeException instance

    Returns:
        int: HTTP status code
    """
    return _STATUS_MAPPING.get(exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)

