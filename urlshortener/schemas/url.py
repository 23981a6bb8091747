from pydantic import BaseModel, HttpUrl, Field, TypeAdapter, field_validator
from datetime import datetime

MAX_URL_LENGTH = 2048

_http_url = TypeAdapter(HttpUrl)


# Request DTOs
class URLRequest(BaseModel):
    # original_url is the Python field, 'url' is the JSON key
    original_url: str = Field(..., alias="url")

    @field_validator('original_url')
    def validate_url(cls, v):
        if len(v) > MAX_URL_LENGTH:
            raise ValueError(f'URL must be less than {MAX_URL_LENGTH} characters')

        # HttpUrl only checks the value; the client's string is stored as sent
        parsed = _http_url.validate_python(v)
        if not parsed.host:
            raise ValueError('URL must include a host')

        return v


# Response DTOs
class URLResponse(BaseModel):
    id: int
    short_code: str
    original_url: str = Field(..., alias="url")
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True, "populate_by_name": True}


class URLStatsResponse(URLResponse):
    access_count: int
