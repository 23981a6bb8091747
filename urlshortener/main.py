from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
import logging
import time
import uuid

from urlshortener.core.config import settings
from urlshortener.core.exceptions import DeadlineExceeded, ShortenerError
from urlshortener.core.logging_config import configure_logging
from urlshortener.db.Connection import database
from urlshortener.db.Models import models
from urlshortener.api import health, shortener
from urlshortener.schemas.response import (
    BAD_REQUEST_MESSAGE,
    EMPTY_REQUEST_BODY_MESSAGE,
    SERVER_ERROR_MESSAGE,
    TIMEOUT_MESSAGE,
    error_response,
    validation_error_response,
)

logger = configure_logging(settings.log_level)
request_logger = logging.getLogger("urlshortener.requests")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Application '{settings.PROJECT_NAME}' starting up (env={settings.ENV}).")
    models.Base.metadata.create_all(bind=database.engine)
    logger.info("Database models initialized/checked.")
    database.verify_database_connection()
    yield
    logger.info("Shutting down gracefully...")
    database.engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="URL Shortener Service",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"https://.*",
    allow_credentials=False,
    allow_methods=["POST", "GET", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
    max_age=84600,
)

app.include_router(shortener.router, prefix="/api/v1")
app.include_router(health.router)
# catch-all /{short_code} goes last
app.include_router(shortener.redirect_router)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = request_id
    request_logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} "
        f"in {duration_ms:.2f}ms (request_id={request_id})"
    )
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        body = error_response(BAD_REQUEST_MESSAGE)
    elif any(tuple(e.get("loc", ())) == ("body",) for e in errors):
        missing = all(e.get("type") == "missing" for e in errors)
        body = error_response(EMPTY_REQUEST_BODY_MESSAGE if missing else BAD_REQUEST_MESSAGE)
    else:
        body = validation_error_response(errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.to_content())


@app.exception_handler(DeadlineExceeded)
async def deadline_exception_handler(request: Request, exc: DeadlineExceeded):
    logger.warning(f"Request abandoned: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=error_response(TIMEOUT_MESSAGE).to_content(),
    )


@app.exception_handler(ShortenerError)
async def shortener_exception_handler(request: Request, exc: ShortenerError):
    logger.error(f"Service failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(SERVER_ERROR_MESSAGE).to_content(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(SERVER_ERROR_MESSAGE).to_content(),
    )
