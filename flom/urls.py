"""URL validation."""

import re
from urllib.parse import urlparse

from .errors import InvalidInput

INVALID_HOST_CHARS = re.compile(r'[\s<>"{}|\\^`]')


def validate_url(value: str) -> None:
    """Check that value is an absolute URL with a scheme and a valid host.

    Args:
        value: Candidate URL

    Raises:
        InvalidInput: If the string is not an absolute URL
    """
    try:
        parsed = urlparse(value.strip())
        # Raises ValueError for non-numeric or out-of-range ports
        parsed.port
    except ValueError as e:
        raise InvalidInput(f"invalid url: {e}: {value}") from e

    if not parsed.scheme:
        raise InvalidInput(f"invalid url: relative URL without a scheme: {value}")
    if not parsed.hostname:
        raise InvalidInput(f"invalid url: empty host: {value}")
    if INVALID_HOST_CHARS.search(parsed.hostname):
        raise InvalidInput(f"invalid url: invalid host: {value}")
