"""
Main FastAPI application
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, List
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import time
import uuid
from prometheus_client import make_asgi_app

from flightbook.config import settings
from flightbook.core.database import init_db, close_db
from flightbook.core.redis import init_redis, close_redis
from flightbook.core.exceptions import FlightBookingException
from flightbook.core.logging import setup_logging
from flightbook.core.metrics import REQUEST_COUNT, REQUEST_DURATION
from flightbook.api.v1.api import api_router
from flightbook.schemas.response import ErrorResponse
from flightbook.schemas.seat import SEAT_ACTIONS

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    await init_db()
    logger.info("Database connection established")

    await init_redis()
    logger.info("Redis connection established")

    yield

    logger.info("Shutting down application")

    await close_db()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    description="Flight search, seat selection and booking API",
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


@app.middleware("http")
async def track_requests(request: Request, call_next):
    """
    Track request metrics and add request ID
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    REQUEST_COUNT.labels(
        method=request.method,
        endpoint=request.url.path,
        status=response.status_code
    ).inc()

    REQUEST_DURATION.labels(
        method=request.method,
        endpoint=request.url.path
    ).observe(duration)

    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = str(duration)

    return response


def error_response(status_code: int, message: str, code: str, details: Dict[str, Any] = None) -> JSONResponse:
    body = ErrorResponse(error=message, code=code, details=details or None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _field_name(loc) -> str:
    parts = [str(part) for part in loc[1:]] if loc and loc[0] == "body" else [str(part) for part in loc]
    # Discriminated unions prefix the location with the tag value
    if len(parts) > 1 and parts[0] in SEAT_ACTIONS:
        parts = parts[1:]
    return ".".join(parts) or "request body"


def validation_message(errors: List[Dict[str, Any]]) -> str:
    error_types = {error["type"] for error in errors}
    if error_types & {"union_tag_invalid", "union_tag_not_found"}:
        return "Invalid action specified"

    missing = [_field_name(error["loc"]) for error in errors if error["type"] == "missing"]
    if missing:
        return f"Missing required fields: {', '.join(missing)}"

    first = errors[0]
    return f"Invalid request: {_field_name(first['loc'])}: {first['msg']}"


@app.exception_handler(FlightBookingException)
async def flight_booking_exception_handler(request: Request, exc: FlightBookingException):
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}", exc_info=exc.__cause__ or exc)
    else:
        logger.info(f"{exc.code} on {request.url.path}: {exc.message}")
    return error_response(exc.status_code, exc.message, exc.code, exc.details)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.info(f"Rejected payload on {request.url.path}: {errors}")
    return error_response(400, validation_message(errors), "INVALID_INPUT")


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f"Internal server error: {exc}", exc_info=True)
    return error_response(500, "Internal server error", "INTERNAL_ERROR")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.APP_ENV,
        "api_docs": "/docs" if settings.DEBUG else None
    }


app.include_router(api_router, prefix=settings.API_PREFIX)

# Mount Prometheus metrics endpoint
if settings.PROMETHEUS_ENABLED:
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "flightbook.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
