"""Conversion result types."""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class MediaIdentity:
    """Title/artist/album of a resolved entity.

    Any field may be missing because the resolution service omits it.
    """

    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None


@dataclass(frozen=True)
class ConversionResult:
    """One resolved (source URL, target platform) pair."""

    source_url: str
    """URL the user supplied"""

    target_url: Optional[str] = None
    """Equivalent URL on the target platform"""

    source_platform: Optional[str] = None
    """Platform key of the source link, if known"""

    target_platform: Optional[str] = None
    """Platform key of the target link, or 'songlink' for the generic page"""

    source_info: Optional[MediaIdentity] = None
    target_info: Optional[MediaIdentity] = None

    warning: Optional[str] = None
    """Set only by best-effort conversion paths"""

    def to_dict(self) -> dict:
        """Convert to a JSON-serialisable dict."""
        return asdict(self)
