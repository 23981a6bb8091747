import logging
import time
from typing import Optional

from urlshortener.core.exceptions import DeadlineExceeded
from urlshortener.core.outcomes import (
    Conflict,
    LookupResult,
    MaxRetriesExceeded,
    NotFound,
    ShortenResult,
)
from urlshortener.db.repository import URLRepository
from urlshortener.utils.encoding import DEFAULT_SHORT_CODE_LENGTH, generate_short_code


logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 5


def _check_deadline(op: str, deadline: Optional[float]):
    if deadline is not None and time.monotonic() >= deadline:
        logger.warning(f"{op}: deadline passed, abandoning")
        raise DeadlineExceeded(op)


class URLService:
    """Creates short codes and passes lookups through to the repository.

    Holds no state besides its configuration, so a single instance can be
    shared between concurrent requests.
    """

    def __init__(
        self,
        repo: URLRepository,
        short_code_length: int = DEFAULT_SHORT_CODE_LENGTH,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        if short_code_length < 1:
            raise ValueError("short_code_length must be at least 1")
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.repo = repo
        self.short_code_length = short_code_length
        self.max_retries = max_retries

    def shorten_url(self, original_url: str, deadline: Optional[float] = None) -> ShortenResult:
        """Store `original_url` under a freshly generated, unused short code.

        Each collision makes the next candidate one character longer. The
        longer length only lives for this call. Storage errors are not
        retried.
        """
        op = "service.shorten_url"
        length = self.short_code_length

        for attempt in range(1, self.max_retries + 1):
            _check_deadline(op, deadline)
            short_code = generate_short_code(length)
            result = self.repo.insert(short_code, original_url)
            if isinstance(result, Conflict):
                logger.info(f"Short code collision on attempt {attempt}/{self.max_retries} (length={length})")
                length += 1
                continue

            logger.info(f"Shortened {original_url[:50]} to {result.short_code}")
            return result

        logger.error(
            f"Failed to generate unique short code after {self.max_retries} attempts "
            f"(last length={length - 1})"
        )
        return MaxRetriesExceeded(attempts=self.max_retries, last_length=length - 1)

    def resolve_short_code(self, short_code: str, deadline: Optional[float] = None) -> LookupResult:
        _check_deadline("service.resolve_short_code", deadline)
        return self.repo.read_and_increment(short_code)

    def modify_url(self, short_code: str, original_url: str, deadline: Optional[float] = None) -> LookupResult:
        _check_deadline("service.modify_url", deadline)
        return self.repo.update(short_code, original_url)

    def deactivate_url(self, short_code: str, deadline: Optional[float] = None) -> Optional[NotFound]:
        _check_deadline("service.deactivate_url", deadline)
        result = self.repo.delete(short_code)
        if result is None:
            logger.info(f"Deactivated short code {short_code}")
        return result

    def get_url_stats(self, short_code: str, deadline: Optional[float] = None) -> LookupResult:
        _check_deadline("service.get_url_stats", deadline)
        return self.repo.read_stats(short_code)
