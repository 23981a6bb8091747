from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import Session
import logging
import time

from urlshortener.core.config import settings
from urlshortener.core.outcomes import MaxRetriesExceeded, NotFound
from urlshortener.db.Connection import database
from urlshortener.db.repository import SQLAlchemyURLRepository
from urlshortener.schemas.response import (
    NOT_FOUND_MESSAGE,
    SERVER_ERROR_MESSAGE,
    error_response,
    success_response,
)
from urlshortener.schemas.url import URLRequest, URLResponse, URLStatsResponse
from urlshortener.services.shortener import URLService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shorten", tags=["shorten"])
redirect_router = APIRouter(tags=["redirect"])


def get_url_service(db: Session = Depends(database.get_db)) -> URLService:
    return URLService(
        SQLAlchemyURLRepository(db),
        short_code_length=settings.SHORT_CODE_LENGTH,
        max_retries=settings.SHORT_CODE_MAX_RETRIES,
    )


def get_deadline() -> float:
    return time.monotonic() + settings.REQUEST_TIMEOUT_SECONDS


def _json(status_code: int, body) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.to_content())


def _not_found(short_code: str, action: str) -> JSONResponse:
    logger.warning(f"{action} 404: Short code not found: {short_code}")
    return _json(status.HTTP_404_NOT_FOUND, error_response(NOT_FOUND_MESSAGE))


@router.post("", status_code=status.HTTP_201_CREATED)
def shorten_url_endpoint(
    url_request: URLRequest,
    svc: URLService = Depends(get_url_service),
    deadline: float = Depends(get_deadline),
):
    original_url = url_request.original_url
    result = svc.shorten_url(original_url, deadline=deadline)
    if isinstance(result, MaxRetriesExceeded):
        logger.error(
            f"Failed to shorten {original_url[:50]}: max retries exceeded "
            f"after {result.attempts} attempts"
        )
        return _json(status.HTTP_500_INTERNAL_SERVER_ERROR, error_response(SERVER_ERROR_MESSAGE))

    logger.info(f"API success: Shortened {original_url[:50]}... to {result.short_code}")
    return _json(
        status.HTTP_201_CREATED,
        success_response("The URL has been shortened successfully.", URLResponse.model_validate(result)),
    )


@router.get("/{short_code}")
def resolve_short_code_endpoint(
    short_code: str,
    svc: URLService = Depends(get_url_service),
    deadline: float = Depends(get_deadline),
):
    result = svc.resolve_short_code(short_code, deadline=deadline)
    if isinstance(result, NotFound):
        return _not_found(short_code, "Resolve")
    return _json(
        status.HTTP_200_OK,
        success_response("The short code was successfully resolved.", URLResponse.model_validate(result)),
    )


@router.put("/{short_code}")
def modify_url_endpoint(
    short_code: str,
    url_request: URLRequest,
    svc: URLService = Depends(get_url_service),
    deadline: float = Depends(get_deadline),
):
    result = svc.modify_url(short_code, url_request.original_url, deadline=deadline)
    if isinstance(result, NotFound):
        return _not_found(short_code, "Modify")
    logger.info(f"Modified {short_code} -> {result.original_url[:50]}")
    return _json(
        status.HTTP_200_OK,
        success_response("The URL was successfully modified.", URLResponse.model_validate(result)),
    )


@router.delete("/{short_code}")
def deactivate_url_endpoint(
    short_code: str,
    svc: URLService = Depends(get_url_service),
    deadline: float = Depends(get_deadline),
):
    result = svc.deactivate_url(short_code, deadline=deadline)
    if isinstance(result, NotFound):
        return _not_found(short_code, "Deactivate")
    return _json(status.HTTP_200_OK, success_response("The URL was successfully deactivated."))


@router.get("/{short_code}/stats")
def get_url_stats_endpoint(
    short_code: str,
    svc: URLService = Depends(get_url_service),
    deadline: float = Depends(get_deadline),
):
    result = svc.get_url_stats(short_code, deadline=deadline)
    if isinstance(result, NotFound):
        return _not_found(short_code, "Stats")
    return _json(
        status.HTTP_200_OK,
        success_response("The URL statistics retrieved successfully.", URLStatsResponse.model_validate(result)),
    )


@redirect_router.get("/{short_code}")
def redirect_to_url_endpoint(
    short_code: str,
    svc: URLService = Depends(get_url_service),
    deadline: float = Depends(get_deadline),
):
    """
    Access the shortened URL and get redirected to the original long URL.
    """
    result = svc.resolve_short_code(short_code, deadline=deadline)
    if isinstance(result, NotFound):
        return _not_found(short_code, "Redirect")
    return RedirectResponse(url=result.original_url, status_code=status.HTTP_302_FOUND)
