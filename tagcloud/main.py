"""Main FastAPI application entry point."""

import logging
import os

# Configure logging BEFORE importing any app modules that create loggers
# Get config from environment variables directly to avoid circular import
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE_PATH = os.getenv("LOG_FILE_PATH")

handlers = [logging.StreamHandler()]  # Always log to stdout

# Add file logging if LOG_FILE_PATH is set
if LOG_FILE_PATH:
    handlers.append(logging.FileHandler(LOG_FILE_PATH, mode="a"))

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=handlers,
    force=True,  # Force reconfiguration even if logging was already initialized
)

logger = logging.getLogger(__name__)
logger.info(f"Logging configured: level={LOG_LEVEL}, file={LOG_FILE_PATH or 'stdout only'}")

# Now import everything else after logging is configured
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tagcloud.config import settings
from tagcloud.database import Store, init_db
from tagcloud.database_migrations import run_startup_migrations
from tagcloud.routers.api import diagnostics as api_diagnostics
from tagcloud.routers.api import tags as api_tags
from tagcloud.routers.web.views import FrontendFiles
from tagcloud.utils.store_errors import StoreError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    store = Store.from_settings(settings)
    app.state.store = store
    logger.info(f"Starting {settings.app_name} with database at {store.engine.url!r}")

    # Diagnostic only, an unreachable database does not stop the server
    store.check_connection()

    try:
        init_db(store)
    except Exception as e:
        logger.warning(f"Could not initialize database tables: {e!s}")

    if settings.auto_migrate:
        logger.info("Running database migrations...")
        run_startup_migrations(store)

    yield

    # Shutdown
    logger.info("Closing database connections...")
    store.dispose()
    logger.info("Application shutdown complete")


# Create FastAPI app
app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.cors_origin],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(StoreError)
async def store_exception_handler(request: Request, exc: StoreError):
    """Turn store failures into a 500 carrying the database's message."""
    logger.error(f"Error in {request.method} {request.url.path}: {exc!r}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Server error", "details": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests in the same shape as other errors."""
    errors = exc.errors()
    details = None
    if errors:
        field = " -> ".join(str(loc) for loc in errors[0]["loc"])
        details = f"{field}: {errors[0]['msg']}"
    logger.info(f"Invalid request to {request.method} {request.url.path}: {details}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "Invalid request", "details": details},
    )


# Add global exception handler to log unhandled exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch and log all unhandled exceptions."""
    logger.exception(
        f"Unhandled exception occurred: {exc!r}\n"
        f"Request: {request.method} {request.url}\n"
        f"Client: {request.client.host if request.client else 'unknown'}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": settings.app_version, "app_name": settings.app_name}


app.include_router(api_diagnostics.router)
app.include_router(api_tags.router)

# Catch-all static front-end, must stay last
app.mount("/", FrontendFiles(directory=settings.static_dir), name="frontend")


def run():
    """Serve the application with uvicorn."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
