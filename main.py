"""
PrepCoach - Adaptive Mock Interview Coach

Main application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prepcoach.api.dependencies import cleanup
from prepcoach.api.router import api_router
from prepcoach.config.settings import get_settings
from prepcoach.core.adaptive_controller import InvalidEvaluationInput
from prepcoach.core.ai_reasoning import UpstreamServiceError

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Running in {'debug' if settings.debug else 'production'} mode")
    if not settings.ai_gateway_api_key:
        logger.warning("AI gateway API key is not set; scoring and question generation will fail")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    await cleanup()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Adaptive mock interview coach with performance analytics",
    version=settings.app_version,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount API routes
app.include_router(api_router, prefix="/api")


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================

@app.exception_handler(InvalidEvaluationInput)
async def invalid_evaluation_handler(request: Request, exc: InvalidEvaluationInput):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(UpstreamServiceError)
async def upstream_error_handler(request: Request, exc: UpstreamServiceError):
    status_code = exc.status_code if exc.status_code in (402, 429) else 502
    logger.error(f"Upstream failure on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


# ============================================================================
# ROOT ROUTES
# ============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
