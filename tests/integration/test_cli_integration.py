"""Integration tests for CLI commands."""

import json
from unittest.mock import patch

import yaml
from click.testing import CliRunner

from flom.cli import cli
from flom.errors import NetworkError

SPOTIFY_URL = "https://open.spotify.com/track/4Km5HrUvYTaSUfiSGPJeQR"


class TestConvertCommand:
    """Test the default convert command end-to-end."""

    def test_convert_to_platform(self, mock_odesli):
        runner = CliRunner()
        result = runner.invoke(cli, [SPOTIFY_URL, "--to", "tidal"])

        assert result.exit_code == 0
        assert "https://listen.tidal.com/track/2" in result.output
        assert "spotify - Bad Guy / Billie Eilish" in result.output
        assert "Total: 1 | Success: 1 | Failed: 0" in result.output

    def test_explicit_convert_command(self, mock_odesli):
        runner = CliRunner()
        result = runner.invoke(cli, ["convert", SPOTIFY_URL, "--to", "tidal"])

        assert result.exit_code == 0
        mock_odesli.return_value.fetch_links.assert_called_once_with(SPOTIFY_URL)

    def test_options_before_url(self, mock_odesli):
        runner = CliRunner()
        result = runner.invoke(cli, ["--to", "itunes", "--simple", SPOTIFY_URL])

        assert result.exit_code == 0
        assert "https://geo.itunes.apple.com/us/album/_/1?i=1" in result.output

    def test_all_targets_in_key_order(self, mock_odesli):
        runner = CliRunner()
        result = runner.invoke(cli, [SPOTIFY_URL, "--to", "all", "--simple"])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "https://geo.itunes.apple.com/us/album/_/1?i=1",
            SPOTIFY_URL,
            "https://listen.tidal.com/track/2",
        ]

    def test_songlink_page(self, mock_odesli):
        runner = CliRunner()
        result = runner.invoke(cli, [SPOTIFY_URL, "--to", "songlink", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout.strip())
        assert data["target_url"] == "https://song.link/s/4Km5HrUvYTaSUfiSGPJeQR"
        assert data["target_platform"] == "songlink"
        assert data["source_info"] is None
        assert data["target_info"] is None

    def test_unknown_target_fails_without_request(self, mock_odesli):
        runner = CliRunner()
        result = runner.invoke(cli, [SPOTIFY_URL, "--to", "myspace"])

        assert result.exit_code == 1
        assert "unknown target: myspace" in result.output
        mock_odesli.return_value.fetch_links.assert_not_called()

    def test_batch_continues_after_failure(self, mock_odesli):
        runner = CliRunner()
        result = runner.invoke(cli, ["not-a-url", SPOTIFY_URL, "--to", "deezer", "https://x.example/1"])

        assert result.exit_code == 1
        assert "invalid url" in result.output
        assert "target platform not available: deezer" in result.output
        assert "Total: 3 | Success: 0 | Failed: 3" in result.output

    def test_network_error_reported(self, mock_odesli):
        mock_odesli.return_value.fetch_links.side_effect = NetworkError("odesli request failed: timed out")
        runner = CliRunner()
        result = runner.invoke(cli, [SPOTIFY_URL, "--to", "tidal"])

        assert result.exit_code == 1
        assert "network error: odesli request failed: timed out" in result.output

    def test_default_target_from_config(self, mock_odesli, write_config):
        write_config({"default": {"target": "tidal", "user_country": "GB"}, "api": {"odesli_key": "k"}})
        runner = CliRunner()
        result = runner.invoke(cli, [SPOTIFY_URL])

        assert result.exit_code == 0
        assert "https://listen.tidal.com/track/2" in result.output
        mock_odesli.assert_called_once_with(api_key="k", user_country="GB")

    def test_env_overrides_config(self, mock_odesli, write_config, monkeypatch):
        write_config({"default": {"target": "tidal"}})
        monkeypatch.setenv("FLOM_DEFAULT_TARGET", "itunes")
        monkeypatch.setenv("FLOM_OUTPUT_SIMPLE", "true")
        runner = CliRunner()
        result = runner.invoke(cli, [SPOTIFY_URL])

        assert result.exit_code == 0
        assert result.stdout == "https://geo.itunes.apple.com/us/album/_/1?i=1\n"

    def test_urls_from_input_file(self, mock_odesli, tmp_path):
        input_file = tmp_path / "urls.txt"
        input_file.write_text(f"\n{SPOTIFY_URL}\n  \n{SPOTIFY_URL}\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--input", str(input_file), "--to", "tidal"])

        assert result.exit_code == 0
        assert mock_odesli.return_value.fetch_links.call_count == 2
        assert "Total: 2 | Success: 2 | Failed: 0" in result.output

    def test_urls_from_stdin(self, mock_odesli):
        runner = CliRunner()
        result = runner.invoke(cli, ["--to", "tidal"], input=f"{SPOTIFY_URL}\n")

        assert result.exit_code == 0
        mock_odesli.return_value.fetch_links.assert_called_once_with(SPOTIFY_URL)

    def test_no_urls(self, mock_odesli):
        runner = CliRunner()
        result = runner.invoke(cli, ["--to", "tidal"], input="")

        assert result.exit_code == 1
        assert "no input URLs provided" in result.output

    def test_interactive_target_prompt(self, mock_odesli):
        runner = CliRunner()
        with patch("flom.cli.is_interactive", return_value=True):
            # Skip the API key prompt, then pick "Tidal" (iTunes, Spotify, Tidal, All, Songlink)
            result = runner.invoke(cli, [SPOTIFY_URL], input="\n3\n")

        assert result.exit_code == 0
        assert "Select target platform:" in result.output
        assert "https://listen.tidal.com/track/2" in result.output

    def test_interactive_prompt_all(self, mock_odesli, write_config):
        write_config({"api": {"odesli_key": "k"}})
        runner = CliRunner()
        with patch("flom.cli.is_interactive", return_value=True):
            result = runner.invoke(cli, [SPOTIFY_URL, "--simple"], input="4\n")

        assert result.exit_code == 0
        assert "https://listen.tidal.com/track/2" in result.output
        assert "https://geo.itunes.apple.com/us/album/_/1?i=1" in result.output

    def test_api_key_prompt_saves_config(self, mock_odesli, isolated_config):
        runner = CliRunner()
        with patch("flom.cli.is_interactive", return_value=True):
            result = runner.invoke(cli, [SPOTIFY_URL, "--to", "tidal"], input="my-key\ny\n")

        assert result.exit_code == 0
        mock_odesli.assert_called_once_with(api_key="my-key", user_country="US")
        saved = yaml.safe_load(isolated_config.read_text())
        assert saved["api"]["odesli_key"] == "my-key"

    def test_numeric_default_target_from_config(self, mock_odesli, write_config):
        write_config({"default": {"target": 5}})
        runner = CliRunner()
        result = runner.invoke(cli, [SPOTIFY_URL])

        assert result.exit_code == 1
        assert not isinstance(result.exception, AttributeError)
        assert "unknown target: 5" in result.output

    def test_non_scalar_config_value(self, mock_odesli, write_config):
        write_config({"default": {"target": ["tidal"]}})
        runner = CliRunner()
        result = runner.invoke(cli, [SPOTIFY_URL])

        assert result.exit_code == 1
        assert "configuration error" in result.output
        mock_odesli.return_value.fetch_links.assert_not_called()

    def test_simple_output_string_in_config(self, mock_odesli, write_config):
        write_config({"output": {"simple": "no"}})
        runner = CliRunner()
        result = runner.invoke(cli, [SPOTIFY_URL, "--to", "tidal"])

        assert result.exit_code == 0
        assert "From:" in result.output

    def test_no_arguments_at_terminal(self, mock_odesli):
        runner = CliRunner()
        with patch("flom.cli.is_interactive", return_value=True):
            result = runner.invoke(cli, [])

        assert result.exit_code == 1
        assert "no input URLs provided" in result.output

    def test_non_interactive_without_target(self, mock_odesli):
        runner = CliRunner()
        result = runner.invoke(cli, [SPOTIFY_URL])

        assert result.exit_code == 1
        assert "no target given" in result.output


class TestShorten:
    """Test --shorten mode."""

    def test_shorten(self):
        runner = CliRunner()
        with patch("flom.cli.ShortenClient") as mock_client_class:
            mock_client_class.return_value.shorten.return_value = "https://is.gd/abc"
            result = runner.invoke(cli, ["--shorten", "https://example.com/long"])

        assert result.exit_code == 0
        assert "https://example.com/long -> https://is.gd/abc" in result.output
        assert "Total: 1 | Success: 1 | Failed: 0" in result.output


class TestConfigCommands:
    """Test init and config subcommands."""

    def test_init_creates_config(self, isolated_config):
        runner = CliRunner()
        result = runner.invoke(cli, ["init"])

        assert result.exit_code == 0
        assert isolated_config.exists()
        assert "odesli_key" in isolated_config.read_text()

    def test_init_existing_config(self, write_config):
        write_config({"api": {"odesli_key": "k"}})
        runner = CliRunner()
        result = runner.invoke(cli, ["init"])

        assert result.exit_code == 0
        assert "Config already exists" in result.output

    def test_config_set_and_show(self, isolated_config):
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "set", "default.target", "Apple Music"])
        assert result.exit_code == 0

        result = runner.invoke(cli, ["config", "set", "output.simple", "yes"])
        assert result.exit_code == 0

        saved = yaml.safe_load(isolated_config.read_text())
        assert saved == {"default": {"target": "Apple Music"}, "output": {"simple": True}}

        result = runner.invoke(cli, ["config", "show"])
        assert "target: Apple Music" in result.output

    def test_config_set_rejects_unknown_target(self, isolated_config):
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "set", "default.target", "myspace"])

        assert result.exit_code == 1
        assert not isolated_config.exists()

    def test_invalid_config_file(self, isolated_config):
        isolated_config.write_text("api: [unclosed\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 1
        assert "configuration error" in result.output
