from typing import Optional


class ShortenerError(Exception):
    """Base class for unexpected failures raised by the service."""


class RepositoryError(ShortenerError):
    def __init__(self, op: str, short_code: Optional[str] = None, message: str = "storage operation failed"):
        self.op = op
        self.short_code = short_code
        detail = f"{op}: {message}"
        if short_code is not None:
            detail += f" (short_code={short_code!r})"
        super().__init__(detail)


class DeadlineExceeded(ShortenerError):
    def __init__(self, op: str):
        self.op = op
        super().__init__(f"{op}: deadline exceeded, operation abandoned")
