"""
Pages Router for the LinkSwipe backend.
Serves the gallery and the static legal pages as HTML.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse

from linkswipe.api.deps.resources import get_gallery_service
from linkswipe.api.services.gallery_service import GalleryService
from linkswipe.api.templates.gallery_templates import get_gallery_template
from linkswipe.api.templates.legal_templates import (
    get_legal_documents,
    get_legal_template,
    get_not_found_template,
)
from linkswipe.core.config import settings
from linkswipe.core.logging import get_logger, log_error

logger = get_logger(__name__)

SUBMIT_URL = "/api/v1/profiles/submit"

# Create router
router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def gallery_page(service: GalleryService = Depends(get_gallery_service)):
    """
    Render the approved profile deck.

    The deck is built once per page load; the page never re-fetches it.
    """
    try:
        deck = await service.build_deck()
    except Exception as e:
        log_error(e, {"operation": "gallery_page"})
        return HTMLResponse(
            "<h1>Internal Server Error</h1>",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    html = get_gallery_template(
        deck,
        app_name=settings.APP_NAME,
        price_label=settings.PAYMENT_PRICE_LABEL,
        submit_url=SUBMIT_URL,
        year=datetime.now(timezone.utc).year,
    )
    return HTMLResponse(html)


@router.get("/legal/{document}", response_class=HTMLResponse)
async def legal_page(document: str):
    """Render the terms, privacy or disclaimer page."""
    documents = get_legal_documents(
        settings.APP_NAME, settings.PAYMENT_PRICE_LABEL, settings.CONTACT_EMAIL
    )
    if document not in documents:
        return HTMLResponse(
            get_not_found_template(settings.APP_NAME),
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return HTMLResponse(get_legal_template(documents[document], settings.APP_NAME))
