"""
Structured logging for the LinkSwipe backend.
Every module logs through structlog; the stdlib root logger is the sink so
uvicorn and driver output land in the same stream.
"""

import logging
import sys
from typing import Any, Dict

import structlog
from structlog.stdlib import LoggerFactory

from linkswipe.core.config import settings

# Third-party loggers and the level they are held at
_LIBRARY_LEVELS = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.INFO,
    "motor": logging.WARNING,
    "pymongo": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}


def setup_logging() -> None:
    """Configure structlog and the stdlib sink from LOG_LEVEL and LOG_FORMAT."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    shared_processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=shared_processors + [_get_renderer()],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name, library_level in _LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(library_level)


def _get_renderer():
    """JSON lines in production or when LOG_FORMAT is json, coloured console otherwise."""
    if settings.ENVIRONMENT == "production" or settings.LOG_FORMAT == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger for a module or component.

    Args:
        name: Logger name (usually __name__ or a dotted component name)

    Returns:
        structlog.stdlib.BoundLogger: Logger bound to the configured processors
    """
    return structlog.get_logger(name)


class LoggerMixin:
    """Gives a class a ``logger`` named after its module and class."""

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        """Logger named ``<module>.<ClassName>`` for the instance's class."""
        return get_logger(f"{type(self).__module__}.{type(self).__qualname__}")


# Specialized logging functions for LinkSwipe operations

def log_profile_submission(
    operation: str,
    profile_id: str = None,
    email: str = None,
    platform: str = None,
    status: str = "success",
    **kwargs
) -> None:
    """
    Log profile submission operations.

    Args:
        operation: Operation type (submit, reject)
        profile_id: Profile document ID
        email: Submitter e-mail
        platform: Social platform of the submitted link
        status: Operation status
        **kwargs: Additional context
    """
    logger = get_logger("profile.submission")
    logger.info(
        "Profile submission",
        operation=operation,
        profile_id=profile_id,
        email=email,
        platform=platform,
        status=status,
        **kwargs
    )


def log_payment_webhook(
    outcome: str,
    product_id: str = None,
    email: str = None,
    profile_id: str = None,
    test_mode: bool = None,
    **kwargs
) -> None:
    """
    Log payment webhook deliveries.

    Args:
        outcome: Result (approved, already_approved, invalid_product, not_found, bad_signature)
        product_id: Product identifier from the payload
        email: Payer e-mail
        profile_id: Matched profile document ID
        test_mode: Provider test-mode flag
        **kwargs: Additional context
    """
    logger = get_logger("payment.webhook")
    logger.info(
        "Payment webhook",
        outcome=outcome,
        product_id=product_id,
        email=email,
        profile_id=profile_id,
        test_mode=test_mode,
        **kwargs
    )


def log_storage_operation(
    operation: str,
    key: str = None,
    file_size: int = None,
    url: str = None,
    **kwargs
) -> None:
    """
    Log blob storage operations.

    Args:
        operation: Operation type (upload)
        key: Object key
        file_size: File size in bytes
        url: Public URL of the object
        **kwargs: Additional context
    """
    logger = get_logger("storage.operation")
    logger.info(
        "Storage operation",
        operation=operation,
        key=key,
        file_size=file_size,
        url=url,
        **kwargs
    )


def log_error(error: Exception, context: Dict[str, Any] = None) -> None:
    """Log an unclassified failure with its traceback and handler context."""
    get_logger("error").error(
        "Unhandled failure",
        error=str(error),
        error_type=type(error).__name__,
        context=context or {},
        exc_info=error,
    )


def log_request(method: str, path: str, status_code: int, duration: float, **kwargs) -> None:
    """
    Log one completed HTTP request.

    Args:
        method: HTTP method
        path: Request path without query string
        status_code: Response status code
        duration: Handling time in seconds
        **kwargs: Additional context
    """
    get_logger("http.request").info(
        "HTTP request completed",
        method=method,
        path=path,
        status_code=status_code,
        duration=duration,
        **kwargs
    )
