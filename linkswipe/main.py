"""
LinkSwipe Backend - FastAPI Application
Main entry point for the LinkSwipe backend service.
Handles profile submissions, payment-gated approval and the public swipe gallery.
"""

import time
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from linkswipe.core.config import is_development, is_production, settings
from linkswipe.core.logging import get_logger, log_request, setup_logging
from linkswipe.domain.repositories.profile_repository import ProfileRepository
from linkswipe.infrastructure.database.mongo_client import create_mongo_client, get_database
from linkswipe.infrastructure.storage.blob_storage_service import BlobStorageService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Builds the store and storage clients once and closes them on shutdown.
    """
    # Startup
    setup_logging()

    mongo_client = create_mongo_client()
    app.state.mongo_client = mongo_client
    app.state.mongo_database = get_database(mongo_client)

    http_client = httpx.AsyncClient(timeout=settings.BLOB_STORAGE_TIMEOUT)
    app.state.blob_storage = BlobStorageService(http_client)

    if settings.MONGO_CREATE_INDEXES:
        repository = ProfileRepository(app.state.mongo_database[settings.PROFILES_COLLECTION])
        await repository.create_indexes()

    if not settings.WEBHOOK_SHARED_SECRET:
        logger.warning(
            "WEBHOOK_SHARED_SECRET is not set; payment webhooks are accepted on product ID alone"
        )

    yield

    # Shutdown
    await http_client.aclose()
    mongo_client.close()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="LinkSwipe Backend",
        description="Swipe to discover social profiles - submissions, payment-gated approval and gallery",
        version="1.0.0",
        docs_url="/docs" if not is_production() else None,
        redoc_url="/redoc" if not is_production() else None,
        openapi_url="/openapi.json" if not is_production() else None,
        lifespan=lifespan,
    )

    cors_origins = settings.get_effective_cors_origins()
    logger.info(f"CORS configured with origins: {cors_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Only validates the Host header; Origin is handled by CORS
    if is_production():
        logger.info(
            f"TrustedHost middleware enabled with hosts: {settings.ALLOWED_HOSTS}"
        )
        app.add_middleware(
            TrustedHostMiddleware,
            allowed_hosts=settings.ALLOWED_HOSTS,
        )
    else:
        logger.info("TrustedHost middleware disabled (development mode)")

    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        log_request(
            request.method,
            request.url.path,
            response.status_code,
            round(time.perf_counter() - started, 4),
        )
        return response

    from linkswipe.api.routers import pages_router, profile_router, webhook_router

    app.include_router(
        profile_router.router,
        prefix="/api/v1/profiles",
        tags=["Profiles"],
    )
    app.include_router(
        webhook_router.router,
        prefix="/api/v1/webhooks",
        tags=["Payment Webhooks"],
    )
    app.include_router(pages_router.router, tags=["Pages"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "features_enabled": settings.get_feature_flags(),
        }

    return app


# Create the FastAPI app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "linkswipe.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=is_development(),
        log_level="info",
    )
