"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vies_proxy import __version__
from vies_proxy.api.routes import health, vies
from vies_proxy.core.config import settings
from vies_proxy.core.logging import setup_logging

# Setup logging
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle: log the effective VIES configuration, close the VIES session."""
    logger.info(
        "[%s] v%s env=%s endpoint=%s timeout=%sms default_requester=%s",
        settings.app_name,
        __version__,
        settings.env,
        settings.vies_endpoint_url,
        settings.fetch_timeout_ms,
        "yes" if settings.vies_requester_vat else "no",
    )
    yield
    # Release the shared VIES session if a request ever created it
    if vies.get_lookup_service.cache_info().currsize:
        vies.get_lookup_service().client.close()
        vies.get_lookup_service.cache_clear()
    logger.info("[%s] shutting down", settings.app_name)


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=__version__,
    lifespan=lifespan,
)

# Strict CORS: only configured origins are echoed back
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)


# Security headers middleware
@app.middleware("http")
async def add_security_headers(request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


# Include API routers
app.include_router(health.router)
app.include_router(vies.router, prefix="/api")
