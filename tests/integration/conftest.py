"""Pytest fixtures for integration tests."""

from unittest.mock import patch

import pytest
import yaml

from flom.config import Config
from flom.odesli import OdesliResponse

SPOTIFY_URL = "https://open.spotify.com/track/4Km5HrUvYTaSUfiSGPJeQR"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point flom at a temporary config file and clear env overrides."""
    config_path = tmp_path / "config.yaml"
    monkeypatch.setenv("FLOM_CONFIG", str(config_path))
    for name in ("FLOM_ODESLI_KEY", "FLOM_DEFAULT_TARGET", "FLOM_USER_COUNTRY", "FLOM_OUTPUT_SIMPLE"):
        monkeypatch.delenv(name, raising=False)
    Config.reset()
    yield config_path
    Config.reset()


@pytest.fixture
def write_config(isolated_config):
    """Factory fixture to write the temporary config file."""

    def _write(data: dict):
        with open(isolated_config, "w") as f:
            yaml.dump(data, f)
        return isolated_config

    return _write


@pytest.fixture
def resolved_response():
    """Odesli response with three platforms."""
    return OdesliResponse.from_dict(
        {
            "entityUniqueId": "SPOTIFY_SONG::4Km5HrUvYTaSUfiSGPJeQR",
            "pageUrl": "https://song.link/s/4Km5HrUvYTaSUfiSGPJeQR",
            "linksByPlatform": {
                "spotify": {"entityUniqueId": "SPOTIFY_SONG::4Km5HrUvYTaSUfiSGPJeQR", "url": SPOTIFY_URL},
                "itunes": {"entityUniqueId": "ITUNES_SONG::1", "url": "https://geo.itunes.apple.com/us/album/_/1?i=1"},
                "tidal": {"entityUniqueId": "TIDAL_SONG::2", "url": "https://listen.tidal.com/track/2"},
            },
            "entitiesByUniqueId": {
                "SPOTIFY_SONG::4Km5HrUvYTaSUfiSGPJeQR": {
                    "title": "Bad Guy",
                    "artistName": "Billie Eilish",
                    "apiProvider": "spotify",
                },
            },
        }
    )


@pytest.fixture
def mock_odesli(resolved_response):
    """Mock the Odesli client used by the CLI."""
    with patch("flom.cli.OdesliClient") as mock_client_class:
        mock_client_class.return_value.fetch_links.return_value = resolved_response
        yield mock_client_class
