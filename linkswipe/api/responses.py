"""
JSON error responses shared by the API routers.
"""

from typing import Any, Dict, Optional

from fastapi import status
from fastapi.responses import JSONResponse

from linkswipe.api.dto.profile_dto import MessageResponseDTO
from linkswipe.core.exceptions import LinkSwipeException, get_exception_status_code
from linkswipe.core.logging import log_error

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def exception_response(exc: LinkSwipeException) -> JSONResponse:
    """Render a classified failure with its mapped status code."""
    body = MessageResponseDTO(
        success=False, message=exc.message, error_code=exc.error_code
    )
    return JSONResponse(
        status_code=get_exception_status_code(exc),
        content=body.model_dump(),
    )


def internal_error_response(
    error: Exception, context: Optional[Dict[str, Any]] = None
) -> JSONResponse:
    """Log an unclassified failure and answer with a static 500."""
    log_error(error, context)
    body = MessageResponseDTO(
        success=False, message=INTERNAL_ERROR_MESSAGE, error_code="INTERNAL_ERROR"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )
