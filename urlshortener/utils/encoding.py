import secrets
import string

# URL-safe alphabet, case-sensitive (64 symbols, 6 bits per character)
ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase + "_-"
DEFAULT_SHORT_CODE_LENGTH = 7


def generate_short_code(length: int = DEFAULT_SHORT_CODE_LENGTH) -> str:
    """Generate a cryptographically secure random code of `length` characters."""
    if length < 1:
        raise ValueError("short code length must be at least 1")
    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
