"""
FastAPI application entry point.

Configures the API with all routes and error handling.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fieldauth import __version__
from fieldauth.config import load_config
from fieldauth.errors import ErrorKind, ServiceError
from fieldauth.registry import ProjectRegistryError

from .routes.router import router
from .deps import ServicesDep, get_services, close_services

logger = logging.getLogger(__name__)

# Configure logging
logging.basicConfig(
    level=load_config().log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan manager."""
    logger.info("Starting field project credential API...")

    # Initialize services on startup
    get_services()
    logger.info("Services initialized")

    yield

    # Cleanup on shutdown
    logger.info("Shutting down...")
    close_services()


app = FastAPI(
    title="Field Project Credential API",
    description="Coordinator registration, login and member delegation",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    error = ServiceError(ErrorKind.BAD_REQUEST, "Invalid request")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(ProjectRegistryError)
async def registry_error_handler(request: Request, exc: ProjectRegistryError):
    logger.error(f"Project registry unavailable during {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"error": {"code": "REGISTRY_UNAVAILABLE", "message": "Project registry unavailable"}}
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}}
    )


# Health check
@app.get("/health", tags=["System"])
def health_check(services: ServicesDep):
    """Health check endpoint."""
    return {"status": "healthy", "service": services.config.server.service_name}


app.include_router(router)


# Root endpoint
@app.get("/", tags=["System"])
async def root():
    """API root endpoint."""
    return {
        "name": "Field Project Credential API",
        "version": __version__,
        "docs": "/docs"
    }


def main():
    """Run the API with uvicorn."""
    config = load_config()

    logger.info(f"Starting field project credential API on {config.server.host}:{config.server.port}...")
    if not config.server.bearer_token:
        logger.warning("Server bearer token: NOT SET (registration and login disabled)")

    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
