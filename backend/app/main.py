from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, settings
from app.core.errors import StoreError, ValidationGap
from app.core.logging_config import get_logger
from app.core.security import build_password_context
from app.db.session import build_engine, engine as default_engine, init_db
from app.services import CredentialService, JobCatalog, PasswordResetProvider, UserDirectory
from app.store.record_store import RecordStore, SQLAlchemyRecordStore

# Import API router
from app.api.api import api_router

logger = get_logger("api")


def _error_response(status_code: int, detail, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": detail, **extra})


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as a JSON body with an ``error`` key."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        gap = ValidationGap("Invalid request body", details=jsonable_encoder(exc.errors()))
        logger.info(f"{request.method} {request.url.path}: {gap.message}")
        return _error_response(status.HTTP_400_BAD_REQUEST, gap.message, details=gap.details)

    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError):
        logger.error(f"{request.method} {request.url.path}: unhandled store error: {exc.message}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")


def create_app(
    app_settings: Settings = settings,
    store: Optional[RecordStore] = None,
    reset_provider: Optional[PasswordResetProvider] = None,
) -> FastAPI:
    """
    Build the application and its services.

    Args:
        app_settings: Settings to configure the app with
        store: Record store to use; defaults to a SQLAlchemy store on DATABASE_URL
        reset_provider: Password reset provider; defaults to signed reset tokens

    Returns:
        The FastAPI application
    """
    if store is None:
        # Reuse the process-wide pool unless the app points at another database
        if app_settings.DATABASE_URL == settings.DATABASE_URL:
            bind = default_engine
        else:
            bind = build_engine(app_settings.DATABASE_URL, app_settings.STORE_TIMEOUT_SECONDS)
        store = SQLAlchemyRecordStore(bind)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create database tables on startup."""
        if isinstance(store, SQLAlchemyRecordStore):
            init_db(store.engine)
        logger.info(f"{app_settings.APP_NAME} API started")
        yield

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Job board backend: accounts and job postings",
        version="1.0.0",
        debug=app_settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.store = store
    credentials = CredentialService(
        store,
        context=build_password_context(app_settings.BCRYPT_ROUNDS),
        reset_provider=reset_provider,
    )
    app.state.credentials = credentials
    app.state.users = UserDirectory(store, credentials)
    app.state.jobs = JobCatalog(store, enforce_ownership=app_settings.ENFORCE_JOB_OWNERSHIP)

    # CORS Middleware - allowlist from env (comma-separated)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint."""
        return {"message": f"Welcome to {app_settings.APP_NAME} API"}

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
