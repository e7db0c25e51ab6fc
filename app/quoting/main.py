"""
FastAPI application for the insurance quote comparison service.

Provides endpoints for:
- Processing quote PDFs per tenant
- Listing stored quotations
- Comparing average prices per insurer
- Registering tenants
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import get_settings
from .database import init_db
from .models import HealthResponse
from .routers import quotations, tenants
from .services.extraction import get_dispatcher
from .services.pdf_service import PDFReadError, get_pdf_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Quote Comparison Service...")
    get_pdf_service()
    dispatcher = get_dispatcher()
    logger.info(
        "Loaded %d vendor rules: %s",
        len(dispatcher.rules),
        ", ".join(rule.insurer.value for rule in dispatcher.rules),
    )
    if settings.init_db_on_startup:
        init_db()
        logger.info("Database initialized")
    yield
    logger.info("Shutting down Quote Comparison Service...")


app = FastAPI(
    title="Insurance Quote Comparison API",
    description="Extracts insurer prices from quote PDFs and compares them per tenant",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(status="healthy", version=__version__, timestamp=_now())


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__, timestamp=_now())


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(tenants.router)
app.include_router(quotations.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(PDFReadError)
async def pdf_read_error_handler(request, exc: PDFReadError):
    """Handle unreadable PDF documents."""
    logger.warning("Unreadable PDF on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)},
    )


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
