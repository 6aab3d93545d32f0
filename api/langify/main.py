from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging
import traceback
from langify.core.config import settings
from langify.core.database import init_db
from langify.core.exceptions import (
    LangifyException,
    ValidationError,
    NotFoundError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    PersistenceError
)

# Import models to register them with SQLModel
from langify.models import models  # noqa: F401

# Import API router
from langify.api.v1 import api_router

logger = logging.getLogger(__name__)

# Checked in order; the first matching class decides the status code
EXCEPTION_STATUS_CODES = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    AuthorizationError: status.HTTP_403_FORBIDDEN,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

app = FastAPI(
    title="Langify API",
    description="Courses, lesson player, vocabulary, daily goals, streaks and leaderboards.",
    version="1.0.0",
)


def status_code_for(exc: LangifyException) -> int:
    for exception_class, code in EXCEPTION_STATUS_CODES.items():
        if isinstance(exc, exception_class):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold exception instances that JSONResponse cannot serialize
    return [{key: value for key, value in error.items() if key != "ctx"} for error in exc.errors()]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject malformed requests with 422 and log which fields failed."""
    errors = jsonable_errors(exc)
    logger.warning(f"Request validation failed on {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": errors, "type": "RequestValidationError"},
    )


@app.exception_handler(LangifyException)
async def langify_exception_handler(request: Request, exc: LangifyException):
    """Map domain errors (not found, invalid input, conflicts, roles, persistence) to HTTP responses."""
    status_code = status_code_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "type": type(exc).__name__},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Last resort for unexpected errors; details are only exposed in development."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)

    content = {
        "detail": "An internal server error occurred. Please try again later.",
        "type": "InternalServerError",
    }
    if settings.is_development:
        content = {"detail": str(exc), "type": type(exc).__name__, "traceback": traceback.format_exc()}
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Create missing tables on startup."""
    init_db()
    logger.info(f"Langify API started (timezone={settings.timezone}, environment={settings.environment})")


@app.get("/")
async def root():
    return {
        "message": "Langify API",
        "status": "running",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        }
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}


app.include_router(api_router, prefix=settings.api_v1_prefix)
