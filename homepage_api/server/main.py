"""FastAPI application entry point.

This module initializes the FastAPI application with middleware,
routers, error handlers and core endpoints.
"""

import logging
from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from homepage_api.server import __version__
from homepage_api.server.api.router import router as api_router
from homepage_api.server.config import settings
from homepage_api.server.models.common import ErrorResponse
from homepage_api.server.services.market_data_service import shutdown_market_data_service

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Backend API for the options calculator and market data lookups",
    version=__version__,
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Configure CORS middleware for the frontend dev servers
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(api_router)


@app.on_event("startup")
async def startup_event():
    """Application startup event handler."""
    logger.info(f"Starting {settings.app_name} v{__version__}")
    logger.info(f"Debug mode: {settings.debug}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(
        "Alpha Vantage API key: "
        f"{'configured' if settings.alpha_vantage_configured else 'missing'}"
    )


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event handler.

    Closes the market data HTTP session.
    """
    logger.info(f"Shutting down {settings.app_name}")
    shutdown_market_data_service()


@app.get(
    "/",
    status_code=status.HTTP_200_OK,
    tags=["root"],
    summary="Root endpoint",
    description="Returns welcome message with API information",
)
async def root():
    """Root endpoint.

    Provides basic API information and links to documentation.

    Returns:
        Welcome message with API details
    """
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/health",
    }


# Error handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Render request validation failures as 400 errors.

    Args:
        request: The request that failed validation
        exc: The validation error

    Returns:
        JSON error response listing each invalid field
    """
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}: {errors}")

    body = ErrorResponse(
        error="ValidationError",
        message="Request validation failed",
        detail=errors,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors.

    Args:
        request: The request that caused the error
        exc: The exception that was raised

    Returns:
        JSON error response
    """
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "InternalServerError",
            "message": "An unexpected error occurred",
            "detail": str(exc) if settings.debug else None,
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "homepage_api.server.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )
