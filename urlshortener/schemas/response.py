"""Standard JSON envelope returned by every API endpoint.

    {"status": "success" | "error", "message": ..., "details": ..., "data": ...}

``details`` and ``data`` are left out when empty.
"""
from typing import Any, List, Optional

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

EMPTY_REQUEST_BODY_MESSAGE = "Request body is empty. Please provide necessary data."
BAD_REQUEST_MESSAGE = "Invalid request body."
VALIDATION_ERROR_MESSAGE = "Invalid request body. Please check your input."
NOT_FOUND_MESSAGE = "The requested resource was not found."
SERVER_ERROR_MESSAGE = "An internal server error occurred. Please try again later."
TIMEOUT_MESSAGE = "The request took too long to process. Please try again later."


class ValidationIssue(BaseModel):
    field: str
    value: Any = None
    issue: str


class APIResponse(BaseModel):
    status: str
    message: str
    details: Optional[List[ValidationIssue]] = None
    data: Optional[Any] = None

    def to_content(self) -> dict:
        return jsonable_encoder(self, exclude_none=True, by_alias=True)


def success_response(message: str, data: Optional[BaseModel] = None) -> APIResponse:
    if data is not None:
        data = data.model_dump(mode="json", by_alias=True)
    return APIResponse(status=STATUS_SUCCESS, message=message, data=data)


def error_response(message: str) -> APIResponse:
    return APIResponse(status=STATUS_ERROR, message=message)


def _issue_for(error: dict, field: str) -> str:
    error_type = error.get("type", "")
    if error_type == "missing":
        return "This field is required."
    if error_type.startswith("url") or (field == "url" and error_type == "value_error"):
        return "Invalid url."
    return "Invalid value."


def validation_error_response(errors: List[dict]) -> APIResponse:
    details = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc)
        value = error.get("input") if error.get("type") != "missing" else None
        details.append(ValidationIssue(field=field, value=value, issue=_issue_for(error, field)))
    return APIResponse(status=STATUS_ERROR, message=VALIDATION_ERROR_MESSAGE, details=details)
