"""
app/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Registers API routes and exception handlers
- No business logic should be written here
- Manages application lifecycle (startup/shutdown)
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import time

from app.core.config import settings, validate_settings
from app.core.logging import setup_logging, get_logger
from app.core.errors import add_exception_handlers
from app.services.bulksms_service import get_bulksms_service, close_bulksms_service
from app.api import sms
from utils.constants import SERVICE_NAME, SERVICE_VERSION

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"🚀 Starting {SERVICE_NAME}...")

    try:
        logger.info("Validating configuration...")
        validate_settings()
        logger.info("✅ Configuration validated")

        if not settings.has_gateway_credentials:
            logger.warning("⚠️ BULKSMS_API_KEY or BULKSMS_SENDER_ID is not set")

        get_bulksms_service()

        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Gateway: {settings.BULKSMS_BASE_URL}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield

    logger.info(f"🛑 Shutting down {SERVICE_NAME}...")
    await close_bulksms_service()


app = FastAPI(
    title=SERVICE_NAME,
    description="HTTP proxy for the BulkSMSBD SMS gateway",
    version=SERVICE_VERSION,
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    if process_time > 5.0:
        logger.warning(
            f"Slow request detected: {request.method} {request.url.path}",
            extra={"process_time": process_time}
        )

    return response


add_exception_handlers(app)

app.include_router(sms.router, prefix=settings.API_PREFIX, tags=["SMS"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - basic info."""
    return {
        "status": "running",
        "service": SERVICE_NAME
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Reports whether gateway credentials are configured.
    Does not call the gateway.
    """
    checks = {
        "api_key": "configured" if settings.BULKSMS_API_KEY else "missing",
        "sender_id": "configured" if settings.BULKSMS_SENDER_ID else "missing",
    }
    healthy = settings.has_gateway_credentials

    health_status = {
        "status": "healthy" if healthy else "degraded",
        "timestamp": time.time(),
        "environment": settings.ENVIRONMENT,
        "version": SERVICE_VERSION,
        "checks": checks
    }

    return JSONResponse(content=health_status, status_code=200 if healthy else 503)


@app.get("/live", tags=["Health"])
async def liveness_check():
    """
    Liveness probe - indicates if app is alive.
    """
    return {"status": "alive"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
