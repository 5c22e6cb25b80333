"""
Questlog - FastAPI Backend
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from questlog.config import Settings, get_settings
from questlog.logging import setup_logging, get_logger
from questlog.routers import auth, entities, journals
from questlog.services import AccountService, EntityService, JournalService
from questlog.storage import create_storage

logger = get_logger('main')


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(app.state.settings.LOG_LEVEL)
    logger.info("Starting Questlog API")

    await app.state.storage.initialize()
    logger.info(f"Storage initialized ({app.state.settings.STORAGE_BACKEND})")

    yield

    logger.info("Shutting down application")


def _validation_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return errors


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = _validation_errors(exc)
    logger.debug(f"Rejected {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "errors": errors},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Questlog API",
        description="Campaign journal and entity tracker for tabletop RPGs",
        version="1.0.0",
        lifespan=lifespan
    )

    # Services share one storage instance so every client of this app sees the same records
    storage = create_storage(settings)
    app.state.settings = settings
    app.state.storage = storage
    app.state.account_service = AccountService(storage)
    app.state.journal_service = JournalService(storage)
    app.state.entity_service = EntityService(storage)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE_NAME,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        same_site="lax",
        https_only=settings.SESSION_HTTPS_ONLY,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(auth.router, prefix="/api", tags=["Auth"])
    app.include_router(journals.router, prefix="/api/journals", tags=["Journals"])
    app.include_router(entities.router, prefix="/api/entities", tags=["Entities"])

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "service": "questlog",
            "storage": settings.STORAGE_BACKEND,
        }

    @app.get("/")
    async def root():
        return {
            "name": "Questlog API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health"
        }

    return app
