"""Platform keys, aliases and display names."""

import re
from typing import Dict, Optional

# Canonical key -> words that make up the platform name
PLATFORM_WORDS = {
    "spotify": ("spotify",),
    "appleMusic": ("apple", "music"),
    "itunes": ("itunes",),
    "youtube": ("youtube",),
    "youtubeMusic": ("youtube", "music"),
    "tidal": ("tidal",),
    "deezer": ("deezer",),
    "amazonMusic": ("amazon", "music"),
}

DISPLAY_NAMES = {
    "appleMusic": "Apple Music",
    "itunes": "iTunes",
    "spotify": "Spotify",
    "youtube": "YouTube",
    "youtubeMusic": "YouTube Music",
    "tidal": "Tidal",
    "deezer": "Deezer",
    "amazonMusic": "Amazon Music",
}

SEPARATORS = ("", "-", "_", " ")


def _build_aliases() -> Dict[str, str]:
    aliases = {}
    for key, words in PLATFORM_WORDS.items():
        for separator in SEPARATORS:
            aliases[separator.join(words)] = key
    return aliases


ALIASES = _build_aliases()


def normalize_target(value: str) -> Optional[str]:
    """Map a user-supplied target to a canonical platform key.

    Matching is case-insensitive; multi-word names may be written joined or
    separated by a hyphen, underscore or space.

    Args:
        value: Target as typed by the user (e.g. "Apple-Music")

    Returns:
        Canonical platform key (e.g. "appleMusic"), or None if unrecognized
    """
    normalized = re.sub(r"\s+", " ", value.strip().lower())
    return ALIASES.get(normalized)


def display_name(key: str) -> str:
    """Human-readable label for a platform key.

    Keys the service adds later are returned unchanged.
    """
    return DISPLAY_NAMES.get(key, key)
