"""
Help Article Repository

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.api.deps import DbSession
from src.api.middleware.request_id import RequestIdMiddleware
from src.api.v1 import router as api_v1_router
from src.config import get_settings
from src.database import close_db, init_db
from src.kernel.errors import (
    HelpRepositoryError,
    InvalidOperationError,
    NotFoundError,
    StorageError,
)
from src.logging_config import configure_logging, get_logger
from src.schemas.common import ErrorResponse, FieldError, HealthResponse

settings = get_settings()
logger = get_logger(__name__)

# Most specific first
ERROR_STATUS_CODES = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidOperationError, status.HTTP_400_BAD_REQUEST),
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Configure logging and the database on startup; release connections on shutdown."""
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )
    logger.info("Starting %s v%s (%s)", settings.project_name, settings.version, settings.environment)
    await init_db()

    yield

    await close_db()
    logger.info("Shut down %s", settings.project_name)


app = FastAPI(
    title=settings.project_name,
    description="""
    Help articles for students and staff, with visibility controlled by groups.

    - **Articles**: create, edit and delete help articles
    - **Groups**: regular groups with members; special-access groups with per-user grants
    - **Visibility**: an article tied to groups is shown only to users who qualify for one of them
    - **Search**: case-insensitive search over title, short description and keywords
    - **Help requests**: tell instructors what is missing
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# Last added is outermost; CORS wraps the request-id middleware and error responses
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(
    request: Request,
    status_code: int,
    body: ErrorResponse,
    headers: Optional[dict] = None,
) -> JSONResponse:
    headers = dict(headers or {})
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        headers["X-Request-ID"] = req_id
        if status_code >= 500:
            body.request_id = req_id
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


@app.exception_handler(HelpRepositoryError)
async def domain_exception_handler(request: Request, exc: HelpRepositoryError):
    """Translate core errors into HTTP responses."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS_CODES if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    log = logger.error if status_code >= 500 else logger.info
    log(
        "%s on %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.message,
    )
    return _error_response(request, status_code, ErrorResponse(detail=exc.message))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """401/403/422 raised by dependencies and routers."""
    return _error_response(
        request,
        exc.status_code,
        ErrorResponse(detail=exc.detail),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        FieldError(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            type=error["type"],
        )
        for error in exc.errors()
    ]
    return _error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        ErrorResponse(detail="Validation error", errors=errors),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.debug:
        body = ErrorResponse(detail=str(exc), type=type(exc).__name__)
    else:
        body = ErrorResponse(detail="Internal server error")
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, body)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(db: DbSession):
    """Report version and whether the database answers."""
    try:
        await db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database")
        database = "unavailable"
    return HealthResponse(
        status="ok" if database == "connected" else "degraded",
        version=settings.version,
        environment=settings.environment,
        database=database,
    )


@app.get("/", tags=["Root"])
async def root():
    return {
        "name": settings.project_name,
        "version": settings.version,
        "docs": "/docs" if settings.debug else "disabled",
        "api": {"v1": settings.api_v1_prefix},
    }


app.include_router(api_v1_router, prefix=settings.api_v1_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
