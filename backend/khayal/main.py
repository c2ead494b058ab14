"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from khayal import __version__
from khayal.api.api import api_router
from khayal.config import settings
from khayal.connectors.resend_connector import ResendConnector
from khayal.database import SessionLocal, engine, init_db
from khayal.exceptions import KhayalError
from khayal.logging_setup import configure_logging
from khayal.services.bootstrap import ensure_default_admin
from khayal.utils.uploads import ensure_upload_dir

configure_logging(settings.log_level)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        init_db()

    db = SessionLocal()
    try:
        ensure_default_admin(db, settings)
    finally:
        db.close()

    app.state.email_connector = ResendConnector({
        "base_url": settings.resend_base_url,
        "api_key": settings.resend_api_key,
        "sender": settings.email_from,
    })
    log.info(f"{settings.site_name} API {__version__} started")

    yield

    await app.state.email_connector.close()
    engine.dispose()
    log.info("Email connector closed and database engine disposed.")


app = FastAPI(
    title=f"{settings.site_name} API",
    description="Content management backend for the band website",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__
    }

@app.get("/")
async def root():
    return {
        "message": f"{settings.site_name} API",
        "version": __version__,
        "docs": "/docs"
    }

app.include_router(api_router, prefix=settings.api_prefix)

# Uploaded images
app.mount(settings.upload_url_prefix, StaticFiles(directory=ensure_upload_dir()), name="uploads")


@app.exception_handler(KhayalError)
async def khayal_exception_handler(request: Request, exc: KhayalError):
    if exc.status_code >= 500:
        log.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = f"{field}: {first.get('msg')}" if field else "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})

@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    log.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Database error"}
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    log.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error"}
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn_level = "debug" if settings.log_level.upper() == "VERBOSE" else settings.log_level.lower()
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=uvicorn_level)
