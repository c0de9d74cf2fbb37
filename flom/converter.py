"""Build conversion results from resolved Odesli links."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .errors import UnsupportedInput
from .odesli import OdesliClient, OdesliEntity, OdesliLink, OdesliResponse
from .platforms import display_name
from .result import ConversionResult, MediaIdentity
from .targets import GENERIC_PAGE, TargetSelection
from .urls import validate_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetOption:
    """Platform offered to the user for selection."""

    key: str
    label: str


def entity_to_media(entity: OdesliEntity) -> MediaIdentity:
    """Project an Odesli entity onto title/artist/album."""
    return MediaIdentity(
        title=entity.title,
        artist=entity.artist_name,
        album=entity.album_name,
    )


def infer_source_platform(links: Dict[str, OdesliLink], url: str) -> Optional[str]:
    """Find the platform whose link is exactly the source URL.

    Only exact string matches count; a trailing slash or extra query
    parameters will not match.
    """
    for key in sorted(links):
        if links[key].url == url:
            return key
    return None


def targets_from_response(response: OdesliResponse) -> List[TargetOption]:
    """List platforms available in a response, sorted by key."""
    return [
        TargetOption(key=key, label=display_name(key))
        for key in sorted(response.links_by_platform)
    ]


def build_conversion(
    response: OdesliResponse, source_url: str, target_key: str
) -> ConversionResult:
    """Build the conversion of source_url to one target platform.

    Args:
        response: Resolved links for source_url
        source_url: URL the user supplied
        target_key: Canonical platform key

    Returns:
        Conversion result

    Raises:
        UnsupportedInput: If the response has no link for target_key
    """
    source_entity = response.entities_by_unique_id.get(response.entity_unique_id)
    source_info = entity_to_media(source_entity) if source_entity else None

    source_platform = source_entity.api_provider if source_entity else None
    if source_platform is None:
        source_platform = infer_source_platform(response.links_by_platform, source_url)
        logger.debug("Inferred source platform for %s: %s", source_url, source_platform)

    target_link = response.links_by_platform.get(target_key)
    if target_link is None:
        raise UnsupportedInput(f"target platform not available: {target_key}")

    target_entity = response.entities_by_unique_id.get(target_link.entity_unique_id)

    return ConversionResult(
        source_url=source_url,
        target_url=target_link.url,
        source_platform=source_platform,
        target_platform=target_key,
        source_info=source_info,
        target_info=entity_to_media(target_entity) if target_entity else None,
    )


def build_generic_page(response: OdesliResponse, source_url: str) -> ConversionResult:
    """Point at the song.link page that lists every platform."""
    return ConversionResult(
        source_url=source_url,
        target_url=response.page_url,
        target_platform=GENERIC_PAGE,
    )


def build_all(response: OdesliResponse, source_url: str) -> List[ConversionResult]:
    """Convert to every platform in the response, in key order."""
    return [
        build_conversion(response, source_url, key)
        for key in sorted(response.links_by_platform)
    ]


def build_for_selection(
    response: OdesliResponse, source_url: str, selection: TargetSelection
) -> List[ConversionResult]:
    """Build the results a target selection asks for."""
    if selection.is_all:
        return build_all(response, source_url)
    if selection.is_generic_page:
        return [build_generic_page(response, source_url)]
    return [build_conversion(response, source_url, selection.platform_key)]


def convert_plain_url(source_url: str, target: Optional[str]) -> ConversionResult:
    """Best-effort conversion for URLs that are not music links.

    Raises:
        UnsupportedInput: If no target is given
    """
    if not target:
        raise UnsupportedInput("target is required for url conversion")
    return ConversionResult(
        source_url=source_url,
        target_url=target,
        warning="url conversion is not implemented yet",
    )


class MusicConverter:
    """Resolve music links and convert them to other platforms."""

    def __init__(self, client: OdesliClient):
        """Initialize converter.

        Args:
            client: Odesli client used for lookups
        """
        self.client = client

    def fetch_links(self, url: str) -> OdesliResponse:
        """Validate url and resolve it with Odesli.

        Raises:
            InvalidInput: If url is not an absolute URL (no request is made)
        """
        url = url.strip()
        validate_url(url)
        return self.client.fetch_links(url)

    def convert(self, url: str, selection: TargetSelection) -> List[ConversionResult]:
        """Resolve url and build results for selection."""
        url = url.strip()
        response = self.fetch_links(url)
        return build_for_selection(response, url, selection)
