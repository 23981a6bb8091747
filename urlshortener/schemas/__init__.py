# re-export common schemas for simpler imports
from .url import URLRequest, URLResponse, URLStatsResponse
from .response import (
    APIResponse,
    ValidationIssue,
    error_response,
    success_response,
    validation_error_response,
)

__all__ = [
    "URLRequest",
    "URLResponse",
    "URLStatsResponse",
    "APIResponse",
    "ValidationIssue",
    "error_response",
    "success_response",
    "validation_error_response",
]
