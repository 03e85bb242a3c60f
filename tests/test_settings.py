"""Tests for configuration parsing."""

from __future__ import annotations

import pytest

from litevideo.errors import ConfigError
from litevideo.settings import Config, parse_bool, parse_timeout


def test_defaults() -> None:
    """Enable conversion to WebM with VP9 and Opus by default."""
    config = Config()
    assert config.conversion_enabled is True
    assert config.video_codec == "vp9"
    assert config.audio_codec == "opus"
    assert config.target_extension == "webm"
    assert config.target_mime_type == "video/webm"
    assert config.timeout == 3600.0


def test_from_env_reads_overrides() -> None:
    """Apply LITEVIDEO_* variables on top of the defaults."""
    config = Config.from_env({
        "LITEVIDEO_ENABLE_CONVERSION": "off",
        "LITEVIDEO_ENCODER": "/usr/local/bin/ffmpeg",
        "LITEVIDEO_VIDEO_CODEC": "libvpx-vp9",
        "LITEVIDEO_AUDIO_CODEC": "libopus",
        "LITEVIDEO_TIMEOUT": "90",
    })
    assert config.conversion_enabled is False
    assert config.encoder == "/usr/local/bin/ffmpeg"
    assert config.video_codec == "libvpx-vp9"
    assert config.audio_codec == "libopus"
    assert config.timeout == 90.0


def test_from_env_ignores_empty_values() -> None:
    """Keep defaults when variables are present but blank."""
    assert Config.from_env({"LITEVIDEO_ENCODER": ""}).encoder == Config().encoder


@pytest.mark.parametrize(("value", "expected"), [("1", True), ("Yes", True), (" on ", True),
                                                 ("0", False), ("FALSE", False), ("no", False)])
def test_parse_bool(value: str, expected: bool) -> None:
    assert parse_bool(value) is expected


def test_parse_bool_rejects_garbage() -> None:
    with pytest.raises(ConfigError, match="boolean"):
        parse_bool("maybe")


@pytest.mark.parametrize(("value", "expected"), [("0", None), ("none", None), ("", None), ("2.5", 2.5)])
def test_parse_timeout(value: str, expected) -> None:
    assert parse_timeout(value) == expected


@pytest.mark.parametrize("value", ["soon", "-1"])
def test_parse_timeout_rejects_invalid(value: str) -> None:
    with pytest.raises(ConfigError):
        parse_timeout(value)
