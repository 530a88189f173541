"""Tests for CLI commands.

Tests fetch and info commands.
"""

from unittest.mock import patch

import respx
from httpx import Response
from typer.testing import CliRunner

from pictora_images.cli import app

runner = CliRunner()

URL_A = "https://cdn.example.com/a.jpg"
URL_MISSING = "https://cdn.example.com/missing.jpg"


class TestFetchCommand:
    """Test fetch command."""

    @respx.mock
    def test_fetch_success(self, sample_image_bytes):
        """Test fetching an image prints its status and size."""
        respx.get(URL_A).mock(return_value=Response(200, content=sample_image_bytes))

        result = runner.invoke(app, ["fetch", URL_A])

        assert result.exit_code == 0
        assert "loaded" in result.output
        assert "100x100" in result.output
        assert "Cached images: 1" in result.output

    @respx.mock
    def test_fetch_repeat_hits_cache(self, sample_image_bytes):
        """Test later rounds are served from the cache."""
        route = respx.get(URL_A).mock(return_value=Response(200, content=sample_image_bytes))

        result = runner.invoke(app, ["fetch", URL_A, "--repeat", "3"])

        assert result.exit_code == 0
        assert "Round 3" in result.output
        assert route.call_count == 1
        assert "hits: 2" in result.output

    @respx.mock
    def test_fetch_max_dimension(self, sample_image_bytes):
        """Test images are downscaled on request."""
        respx.get(URL_A).mock(return_value=Response(200, content=sample_image_bytes))

        result = runner.invoke(app, ["fetch", URL_A, "--max-dimension", "25"])

        assert result.exit_code == 0
        assert "25x25" in result.output

    @respx.mock
    def test_fetch_failure_exits_nonzero(self):
        """Test failed loads are reported and set the exit code."""
        respx.get(URL_MISSING).mock(return_value=Response(404))

        result = runner.invoke(app, ["fetch", URL_MISSING])

        assert result.exit_code == 1
        assert "failed" in result.output

    @respx.mock
    def test_fetch_coalesce(self, sample_image_bytes):
        """Test duplicate URLs in one round share a fetch when coalescing."""
        route = respx.get(URL_A).mock(return_value=Response(200, content=sample_image_bytes))

        result = runner.invoke(app, ["fetch", URL_A, URL_A, "--coalesce"])

        assert result.exit_code == 0
        assert route.call_count == 1


class TestInfoCommand:
    """Test info command."""

    def test_info_displays_settings(self):
        """Test info command displays settings."""
        result = runner.invoke(app, ["info"])

        assert result.exit_code == 0
        assert "Pictora Images Configuration" in result.output
        assert "Max Cached Images" in result.output


class TestHelpOutput:
    """Test help output for commands."""

    def test_main_help(self):
        """Test main help output."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "fetch" in result.output
        assert "info" in result.output

    def test_fetch_help(self):
        """Test fetch command help."""
        result = runner.invoke(app, ["fetch", "--help"])

        assert result.exit_code == 0
        assert "--repeat" in result.output
        assert "--max-dimension" in result.output
        assert "--coalesce" in result.output


class TestVerboseFlag:
    """Test verbose flag on main command."""

    def test_verbose_flag_sets_debug(self):
        """Test that -v flag enables debug logging."""
        with patch("pictora_images.cli.setup_logging") as mock_setup:
            result = runner.invoke(app, ["-v", "info"])

        assert result.exit_code == 0
        assert mock_setup.call_args.kwargs["level"] == "DEBUG"
