"""FastAPI application configuration module."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

# Internal imports
from ..config.environment import IS_PRODUCTION_ENVIRONMENT # Environment must be imported first
from .. import __version__
from ..auth.session_gate import SessionGate
from ..config.auth import AuthConfig
from ..config.cors import CORS_CONFIG
from ..config.storage import StorageConfig
from ..db import Database, DatabaseSessionStore, EventStore, SessionStore
from ..event_service import EventService
from ..storage.blob_store import BlobStore, FilesystemBlobStore
from ..utils.logging_config import setup_logging
from .routes import auth, events, health

# Set up logging
setup_logging()
logger = logging.getLogger(__name__)

def _error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers
    )

def create_application(
    database: Optional[Database] = None,
    auth_config: Optional[AuthConfig] = None,
    storage_config: Optional[StorageConfig] = None,
    session_store: Optional[SessionStore] = None,
    blob_store: Optional[BlobStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Every collaborator can be injected; anything not given is built from
    environment configuration.

    Args:
        database: Database holding events (and sessions, unless session_store is given)
        auth_config: Session gate settings
        storage_config: Blob storage settings
        session_store: Store for login sessions (defaults to the database)
        blob_store: Store for uploaded images (defaults to the filesystem)
    """
    database = database or Database()
    auth_config = auth_config or AuthConfig()
    storage_config = storage_config or StorageConfig()
    auth_config.validate()
    storage_config.validate()

    session_store = session_store or DatabaseSessionStore(database)
    blob_store = blob_store or FilesystemBlobStore(
        storage_config.upload_dir,
        storage_config.bucket_name,
        storage_config.public_base_url
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown events."""
        # Startup
        try:
            database.init_db()
            logger.info("Database initialized successfully")
            if isinstance(session_store, DatabaseSessionStore):
                session_store.purge_expired()
        except Exception as e:
            logger.error(f"Startup failed: {e}")
            raise
        auth_config.log_warnings(logger)
        yield
        # Shutdown
        database.dispose()

    app = FastAPI(
        title="Event Planner API",
        description="API for planning events with images and a shared-password login",
        version=__version__,
        docs_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/docs',
        redoc_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/redoc',
        lifespan=lifespan
    )

    app.state.session_gate = SessionGate(auth_config, session_store)
    app.state.event_service = EventService(
        EventStore(database),
        blob_store,
        max_upload_bytes=storage_config.max_upload_bytes
    )

    # Configure CORS
    app.add_middleware(CORSMiddleware, **CORS_CONFIG)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
        return _error_response(400, "Invalid or missing data in request body.")

    # Include health check router without prefix
    app.include_router(health.router)

    # Include routers with prefix
    app.include_router(events.router, prefix="/api")
    app.include_router(auth.router, prefix="/api")

    # Serve uploaded images when they are stored on local disk
    if isinstance(blob_store, FilesystemBlobStore) and blob_store.public_base_url.startswith('/'):
        app.mount(
            blob_store.public_base_url,
            StaticFiles(directory=blob_store.root_dir),
            name="uploads"
        )

    return app
