"""Shared fixtures for unit tests."""

import pytest

from flom.odesli import OdesliResponse

SPOTIFY_URL = "https://open.spotify.com/track/4Km5HrUvYTaSUfiSGPJeQR"


@pytest.fixture
def odesli_payload():
    """Raw Odesli JSON for a Spotify track."""
    return {
        "entityUniqueId": "SPOTIFY_SONG::4Km5HrUvYTaSUfiSGPJeQR",
        "userCountry": "US",
        "pageUrl": "https://song.link/s/4Km5HrUvYTaSUfiSGPJeQR",
        "linksByPlatform": {
            "spotify": {
                "entityUniqueId": "SPOTIFY_SONG::4Km5HrUvYTaSUfiSGPJeQR",
                "url": SPOTIFY_URL,
            },
            "appleMusic": {
                "entityUniqueId": "ITUNES_SONG::1469577741",
                "url": "https://geo.music.apple.com/us/album/_/1469577723?i=1469577741",
            },
            "tidal": {
                "entityUniqueId": "TIDAL_SONG::108581998",
                "url": "https://listen.tidal.com/track/108581998",
            },
        },
        "entitiesByUniqueId": {
            "SPOTIFY_SONG::4Km5HrUvYTaSUfiSGPJeQR": {
                "id": "4Km5HrUvYTaSUfiSGPJeQR",
                "type": "song",
                "title": "Bad Guy",
                "artistName": "Billie Eilish",
                "apiProvider": "spotify",
            },
            "ITUNES_SONG::1469577741": {
                "id": "1469577741",
                "title": "bad guy",
                "artistName": "Billie Eilish",
                "albumName": "WHEN WE ALL FALL ASLEEP, WHERE DO WE GO?",
                "apiProvider": "itunes",
            },
        },
    }


@pytest.fixture
def odesli_response(odesli_payload):
    """Parsed Odesli response for a Spotify track."""
    return OdesliResponse.from_dict(odesli_payload)
