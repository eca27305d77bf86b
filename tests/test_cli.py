"""Smoke tests for the CLI.

These tests verify CLI behavior without network access; the genai
client is replaced with a mock.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from conftest import (
    GENERATED_BYTES,
    JPEG_BYTES,
    PNG_BYTES,
    image_part,
    make_genai_client,
    make_response,
    text_part,
)
from typer.testing import CliRunner

from image_synth import __version__
from image_synth.cli import app
from image_synth.config import Settings

runner = CliRunner()

_KEY_VARS = ("IMAGE_SYNTH_API_KEY", "GEMINI_API_KEY", "API_KEY")


def _flat(output: str) -> str:
    """Undo rich line wrapping."""
    return " ".join(output.split())


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials and .env files out of these tests."""
    for var in _KEY_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setitem(Settings.model_config, "env_file", None)
    # Logging setup in the command replaces root handlers; keep it quiet
    monkeypatch.setattr("image_synth.log.configure_logging", lambda *a, **k: None)


@pytest.fixture
def images(tmp_path: Path) -> list[Path]:
    """Two source images on disk."""
    cat = tmp_path / "cat.png"
    cat.write_bytes(PNG_BYTES)
    space = tmp_path / "space.jpg"
    space.write_bytes(JPEG_BYTES)
    return [cat, space]


class TestCLIHelp:
    """Test CLI help and version commands."""

    def test_help_returns_zero(self) -> None:
        """CLI --help should return exit code 0."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Image Synth" in result.stdout

    def test_version_flag(self) -> None:
        """CLI --version should print version and exit 0."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_short_version_flag(self) -> None:
        """CLI -V should print version and exit 0."""
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_no_args_shows_help(self) -> None:
        """CLI with no args should show help."""
        result = runner.invoke(app, [])
        assert "Usage:" in result.stdout


class TestCLIConfig:
    """Test CLI config command."""

    def test_config_command(self) -> None:
        """CLI config should show all sections."""
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "Remote service:" in result.stdout
        assert "Operational:" in result.stdout
        assert "Web server:" in result.stdout
        assert "(not set)" in result.stdout

    def test_config_masks_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The key should never be printed in full."""
        monkeypatch.setenv("IMAGE_SYNTH_API_KEY", "supersecret9876")
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "9876" in result.stdout
        assert "supersecret" not in result.stdout

    def test_config_json(self) -> None:
        """CLI config --json should output JSON."""
        result = runner.invoke(app, ["config", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert "model" in data
        assert data["api_key"] is None


class TestCLISynthesize:
    """Test CLI synthesize command."""

    def _invoke(self, args: list[str], response=None, side_effect=None):
        genai_client = make_genai_client(response, side_effect)
        target = "image_synth.synthesis.client.genai.Client"
        with patch(target, return_value=genai_client):
            result = runner.invoke(app, ["synthesize", *args])
        return result, genai_client

    def test_missing_key(self, images: list[Path]) -> None:
        """Without a key the command should fail before any request."""
        result = runner.invoke(app, ["synthesize", str(images[0]), "-p", "cat"])
        assert result.exit_code == 1
        assert "IMAGE_SYNTH_API_KEY" in result.stdout

    def test_writes_image(
        self, monkeypatch: pytest.MonkeyPatch, images: list[Path], tmp_path: Path
    ) -> None:
        """The generated image should be written with a matching suffix."""
        monkeypatch.setenv("IMAGE_SYNTH_API_KEY", "key")
        output = tmp_path / "out"
        response = make_response(image_part(), text_part("A cat in space."))

        result, genai_client = self._invoke(
            [*map(str, images), "-p", "cat in space", "-o", str(output)], response
        )

        assert result.exit_code == 0, result.stdout
        written = tmp_path / "out.png"
        assert written.read_bytes() == GENERATED_BYTES
        assert "A cat in space." in _flat(result.stdout)

        call = genai_client.aio.models.generate_content.call_args
        parts = call.kwargs["contents"].parts
        assert parts[0].inline_data.data == PNG_BYTES
        assert parts[1].inline_data.data == JPEG_BYTES
        assert parts[1].inline_data.mime_type == "image/jpeg"
        assert parts[2].text == "cat in space"

    def test_unwritable_output(
        self, monkeypatch: pytest.MonkeyPatch, images: list[Path], tmp_path: Path
    ) -> None:
        """An output path in a missing directory should exit 1 with a message."""
        monkeypatch.setenv("IMAGE_SYNTH_API_KEY", "key")
        output = tmp_path / "no-such-dir" / "out.png"
        response = make_response(image_part())

        result, _ = self._invoke([str(images[0]), "-p", "cat", "-o", str(output)], response)

        assert result.exit_code == 1
        assert "Could not write" in _flat(result.stdout)
        assert not output.exists()

    def test_json_output(
        self, monkeypatch: pytest.MonkeyPatch, images: list[Path], tmp_path: Path
    ) -> None:
        """--json should report the written path and text."""
        monkeypatch.setenv("IMAGE_SYNTH_API_KEY", "key")
        monkeypatch.chdir(tmp_path)
        response = make_response(text_part("only words"))

        result, _ = self._invoke([str(images[0]), "-p", "cat", "--json"], response)

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"image_path": None, "text": "only words"}

    def test_empty_response(self, monkeypatch: pytest.MonkeyPatch, images: list[Path]) -> None:
        """No content should exit 1 with the error message."""
        from google.genai import types

        monkeypatch.setenv("IMAGE_SYNTH_API_KEY", "key")
        result, _ = self._invoke(
            [str(images[0]), "-p", "cat"], types.GenerateContentResponse(candidates=[])
        )
        assert result.exit_code == 1
        assert "no content" in _flat(result.stdout)

    def test_missing_file(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """An unreadable file should exit 1 without calling the API."""
        monkeypatch.setenv("IMAGE_SYNTH_API_KEY", "key")
        result, genai_client = self._invoke([str(tmp_path / "nope.png"), "-p", "cat"])

        assert result.exit_code == 1
        assert "nope.png" in _flat(result.stdout)
        genai_client.aio.models.generate_content.assert_not_called()

    def test_blank_prompt(self, monkeypatch: pytest.MonkeyPatch, images: list[Path]) -> None:
        """A blank prompt should exit 1 with the validation message."""
        monkeypatch.setenv("IMAGE_SYNTH_API_KEY", "key")
        result, genai_client = self._invoke([str(images[0]), "-p", "  "])
        assert result.exit_code == 1
        assert "provide both images and a prompt" in _flat(result.stdout)
        genai_client.aio.models.generate_content.assert_not_called()


class TestCLIModule:
    """Test the CLI as a module."""

    def test_module_help(self) -> None:
        """python -m image_synth.cli --help should work."""
        result = subprocess.run(
            [sys.executable, "-m", "image_synth.cli", "--help"],
            capture_output=True,
            text=True,
            env={**os.environ, "COLUMNS": "120"},
        )
        assert result.returncode == 0
        assert "synthesize" in result.stdout

