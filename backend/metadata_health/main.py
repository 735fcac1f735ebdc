import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from metadata_health import dependencies
from metadata_health.config import settings
from metadata_health.core.errors import register_error_handlers
from metadata_health.core.middleware import AccessLogMiddleware, RequestIDMiddleware
from metadata_health.routers import clients, providers
from metadata_health.services.dataset_service import DatasetService, get_dataset
from metadata_health.services.snapshot_loader import DatasetLoadError

logger = logging.getLogger("metadata_health")


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Optionally warm the dataset on startup. Otherwise it loads on first request."""
    if settings.preload_on_startup:
        try:
            await get_dataset().ensure_loaded()
        except DatasetLoadError:
            logger.warning("Snapshot preload failed; will retry on first request")
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="API for accessing DataCite provider and client metadata and completeness statistics",
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    lifespan=lifespan,
)

# Middleware order matters: last added is outermost and runs first
# CORS outermost so all responses get CORS headers
cors_kwargs = {
    "allow_origins": settings.cors_origins_list,
    "allow_credentials": False,
    "allow_methods": ["GET"],
    "allow_headers": ["Content-Type", "Authorization"],
    "expose_headers": ["x-request-id"],
}
app.add_middleware(RequestIDMiddleware)
app.add_middleware(AccessLogMiddleware)
app.add_middleware(CORSMiddleware, **cors_kwargs)

# Error handlers
register_error_handlers(app)

# Routers
app.include_router(providers.router, prefix=settings.api_prefix)
app.include_router(clients.router, prefix=settings.api_prefix)


@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/docs", status_code=302)


@app.get("/health")
async def health_check(dataset: DatasetService = Depends(dependencies.get_dataset)):
    return {
        "status": "ok",
        "app": settings.app_name,
        "version": settings.app_version,
        "dataset_ready": dataset.is_ready,
        "loaded_at": dataset.loaded_at,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("metadata_health.main:app", host=settings.host, port=settings.port)
