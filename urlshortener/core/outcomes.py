"""Records and named outcomes shared by the repository and the service layer.

Expected outcomes (a short code that is taken, missing, or a generation
budget that ran out) are returned as values rather than raised, so every
caller has to branch on them explicitly with ``isinstance``.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Union


@dataclass(frozen=True)
class URLRecord:
    id: int
    short_code: str
    original_url: str
    access_count: int
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Conflict:
    """The short code is already stored. Never leaves URLService.shorten_url."""
    short_code: str


@dataclass(frozen=True)
class NotFound:
    short_code: str


@dataclass(frozen=True)
class MaxRetriesExceeded:
    """Every generation attempt collided with an existing short code."""
    attempts: int
    last_length: int


InsertResult = Union[URLRecord, Conflict]
LookupResult = Union[URLRecord, NotFound]
ShortenResult = Union[URLRecord, MaxRetriesExceeded]
