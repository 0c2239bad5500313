from typing import Optional
from urllib.parse import urlparse

from clipfetch.core.errors import InvalidInputError, InvalidUrlFormatError

ALLOWED_SCHEMES = ("http", "https")


def validate_url(url: Optional[str]) -> str:
    """Return the stripped URL or raise InvalidInputError"""
    if url is None or not url.strip():
        raise InvalidInputError("URL cannot be empty")

    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError:
        raise InvalidUrlFormatError("Invalid URL format")

    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not parsed.netloc:
        raise InvalidUrlFormatError("Invalid URL format")
    return url
