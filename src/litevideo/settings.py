"""
Runtime configuration for the conversion core.

``Config`` is passed explicitly to every conversion call; nothing in the core
reads global settings. ``Config.from_env`` builds one from ``LITEVIDEO_*``
environment variables (a local ``.env`` is loaded by the constants module).
"""
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from litevideo.errors import ConfigError
from litevideo.utils.constants import (
    AUDIO_CODEC,
    DEFAULT_TIMEOUT,
    ENCODER_BINARY,
    PROBE_BINARY,
    TARGET_EXTENSION,
    TARGET_MIME_TYPE,
    VIDEO_CODEC,
)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Config:
    conversion_enabled: bool = True
    encoder: str = ENCODER_BINARY
    probe: Optional[str] = PROBE_BINARY
    video_codec: str = VIDEO_CODEC
    audio_codec: str = AUDIO_CODEC
    target_extension: str = TARGET_EXTENSION
    target_mime_type: str = TARGET_MIME_TYPE
    timeout: Optional[float] = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a config from ``LITEVIDEO_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        config = cls()

        enabled = env.get("LITEVIDEO_ENABLE_CONVERSION")
        if enabled is not None:
            config = replace(config, conversion_enabled=parse_bool(enabled))

        for key, field_name in (
            ("LITEVIDEO_ENCODER", "encoder"),
            ("LITEVIDEO_PROBE", "probe"),
            ("LITEVIDEO_VIDEO_CODEC", "video_codec"),
            ("LITEVIDEO_AUDIO_CODEC", "audio_codec"),
        ):
            value = env.get(key)
            if value:
                config = replace(config, **{field_name: value})

        timeout = env.get("LITEVIDEO_TIMEOUT")
        if timeout is not None:
            config = replace(config, timeout=parse_timeout(timeout))

        return config


def parse_bool(value: str) -> bool:
    """Parse a 1/0, true/false, yes/no or on/off string."""
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ConfigError(f"Expected a boolean value, got {value!r}")


def parse_timeout(value: str) -> Optional[float]:
    """Parse a timeout in seconds; ``0``, ``none`` or an empty string disable it."""
    normalized = value.strip().lower()
    if normalized in {"", "none", "0"}:
        return None
    try:
        seconds = float(normalized)
    except ValueError:
        raise ConfigError(f"Timeout must be a number of seconds, got {value!r}") from None
    if seconds < 0:
        raise ConfigError(f"Timeout must not be negative, got {value!r}")
    return seconds or None
