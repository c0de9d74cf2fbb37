"""is.gd link shortener."""

import logging
from typing import Optional

import requests

from . import __version__
from .errors import ApiError, NetworkError, ParseError
from .urls import validate_url

logger = logging.getLogger(__name__)


class ShortenClient:
    """Client for the is.gd shortening API."""

    API_BASE = "https://is.gd/create.php"

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 10):
        """Initialize shortener client.

        Args:
            session: Session to reuse (a new one is created if omitted)
            timeout: Request timeout in seconds
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": f"flom/{__version__}"})

    def shorten(self, url: str) -> str:
        """Shorten a URL.

        Args:
            url: URL to shorten

        Returns:
            Short URL

        Raises:
            InvalidInput: If url is not an absolute URL
            NetworkError: If the request fails
            ApiError: If is.gd rejects the URL
            ParseError: If the response is not valid JSON
        """
        validate_url(url)
        logger.debug("Shortening %s", url)

        try:
            response = self.session.get(
                self.API_BASE,
                params={"format": "json", "url": url},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NetworkError(f"shorten request failed: {e}") from e

        if not response.ok:
            raise ApiError(
                f"shorten error: status={response.status_code} body={response.text}",
                status=response.status_code,
                body=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ParseError(f"shorten response parse failed: {e}") from e

        if not isinstance(payload, dict):
            raise ParseError("shorten response parse failed: expected a JSON object")

        if payload.get("errormessage"):
            raise ApiError(payload["errormessage"], status=response.status_code)

        short_url = payload.get("shorturl")
        if not short_url:
            raise ApiError("shorten response missing shorturl", status=response.status_code)

        return short_url
