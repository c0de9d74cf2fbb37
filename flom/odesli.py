"""Odesli (song.link) integration for resolving links across platforms."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from . import __version__
from .errors import ApiError, NetworkError, ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OdesliLink:
    """Link to the entity on one platform."""

    entity_unique_id: str
    url: str


@dataclass(frozen=True)
class OdesliEntity:
    """Entity as described by one API provider. Every field may be absent."""

    id: Optional[str] = None
    title: Optional[str] = None
    artist_name: Optional[str] = None
    album_name: Optional[str] = None
    api_provider: Optional[str] = None


@dataclass(frozen=True)
class OdesliResponse:
    """Parsed response of the links endpoint."""

    entity_unique_id: str
    page_url: str
    links_by_platform: Dict[str, OdesliLink] = field(default_factory=dict)
    entities_by_unique_id: Dict[str, OdesliEntity] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "OdesliResponse":
        """Build response from decoded JSON.

        Raises:
            ParseError: If required fields are missing or have the wrong type
        """
        if not isinstance(data, dict):
            raise ParseError("odesli response parse failed: expected a JSON object")

        links = _require_mapping(data, "linksByPlatform")
        entities = _require_mapping(data, "entitiesByUniqueId")

        links_by_platform = {}
        for platform, info in links.items():
            if not isinstance(info, dict):
                raise ParseError(
                    f"odesli response parse failed: link for {platform} is not an object"
                )
            links_by_platform[platform] = OdesliLink(
                entity_unique_id=_require_str(info, "entityUniqueId"),
                url=_require_str(info, "url"),
            )

        entities_by_unique_id = {}
        for entity_id, info in entities.items():
            if not isinstance(info, dict):
                raise ParseError(
                    f"odesli response parse failed: entity {entity_id} is not an object"
                )
            entities_by_unique_id[entity_id] = OdesliEntity(
                id=_optional_str(info, "id"),
                title=_optional_str(info, "title"),
                artist_name=_optional_str(info, "artistName"),
                album_name=_optional_str(info, "albumName"),
                api_provider=_optional_str(info, "apiProvider"),
            )

        return cls(
            entity_unique_id=_require_str(data, "entityUniqueId"),
            page_url=_require_str(data, "pageUrl"),
            links_by_platform=links_by_platform,
            entities_by_unique_id=entities_by_unique_id,
        )


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ParseError(f"odesli response parse failed: missing or invalid field `{key}`")
    return value


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    # Some providers report numeric IDs
    if key == "id" and isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ParseError(f"odesli response parse failed: invalid type for field `{key}`")
    return value


def _require_mapping(data: dict, key: str) -> dict:
    value = data.get(key)
    if not isinstance(value, dict):
        raise ParseError(f"odesli response parse failed: missing or invalid field `{key}`")
    return value


class OdesliClient:
    """Client for the Odesli links API.

    One call to fetch_links issues exactly one request. Nothing is cached or
    retried here.
    """

    API_BASE = "https://api.song.link/v1-alpha.1/links"

    def __init__(
        self,
        api_key: Optional[str] = None,
        user_country: str = "US",
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        """Initialize Odesli client.

        Args:
            api_key: Optional API key, sent as the `key` query parameter
            user_country: Country code used for platform availability
            session: Session to reuse (a new one is created if omitted)
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.user_country = user_country
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": f"flom/{__version__}",
                "Accept": "application/json",
            }
        )

    def build_params(self, url: str) -> Dict[str, str]:
        """Build query parameters for a links request."""
        params = {"url": url, "userCountry": self.user_country}
        if self.api_key and self.api_key.strip():
            params["key"] = self.api_key
        return params

    def fetch_links(self, url: str) -> OdesliResponse:
        """Resolve a music link to its equivalents on other platforms.

        Args:
            url: Source URL (any supported platform)

        Returns:
            Parsed Odesli response

        Raises:
            NetworkError: If the request could not be sent or completed
            ApiError: If the API answered with a non-success status
            ParseError: If the response body does not match the schema
        """
        params = self.build_params(url)
        logger.debug(
            "Fetching links for %s (country=%s, key=%s)",
            url,
            self.user_country,
            "yes" if "key" in params else "no",
        )

        try:
            response = self.session.get(self.API_BASE, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkError(f"odesli request failed: {e}") from e

        if not response.ok:
            raise ApiError(
                f"odesli error: status={response.status_code} body={response.text}",
                status=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"odesli response parse failed: {e}") from e

        resolved = OdesliResponse.from_dict(data)
        logger.debug(
            "Resolved %s: %d platforms, %d entities",
            url,
            len(resolved.links_by_platform),
            len(resolved.entities_by_unique_id),
        )
        return resolved
