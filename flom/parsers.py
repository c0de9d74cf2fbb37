"""Track ID extraction for known platform URL shapes."""

import re
from typing import Optional, Tuple
from urllib.parse import parse_qs, urlparse

SPOTIFY_PATTERNS = [
    r"open\.spotify\.com/(?:intl-[a-z]{2}/)?track/([A-Za-z0-9]+)",
    r"spotify:track:([A-Za-z0-9]+)",
]

APPLE_MUSIC_PATH = re.compile(r"music\.apple\.com/.*/(?:song|album)/.+/(\d+)")


def parse_spotify_track_id(url: str) -> Optional[str]:
    """Extract Spotify track ID from URL or URI.

    Args:
        url: Spotify track URL (optionally localized) or spotify:track: URI

    Returns:
        Track ID if found
    """
    for pattern in SPOTIFY_PATTERNS:
        match = re.search(pattern, url)
        if match:
            return match.group(1)
    return None


def parse_apple_music_track_id(url: str) -> Optional[str]:
    """Extract Apple Music track ID from URL.

    Album URLs pointing at a single song carry the track ID in the ``i``
    query parameter; song URLs carry it as the last path segment.

    Args:
        url: Apple Music URL

    Returns:
        Track ID if found
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return None

    if parsed.hostname != "music.apple.com":
        return None

    track_ids = parse_qs(parsed.query).get("i")
    if track_ids:
        return track_ids[0]

    match = APPLE_MUSIC_PATH.search(url)
    return match.group(1) if match else None


def extract_track_id(url: str) -> Optional[Tuple[str, str]]:
    """Identify platform and track ID for supported URLs.

    Returns:
        Tuple of (platform key, track ID), or None for other URLs
    """
    spotify_id = parse_spotify_track_id(url)
    if spotify_id:
        return "spotify", spotify_id

    apple_id = parse_apple_music_track_id(url)
    if apple_id:
        return "appleMusic", apple_id

    return None
