"""
Constants, system helpers, and structured logging shared by the conversion
core, the host collaborators, and the command line.
"""

from .constants import (
    AUDIO_CODEC,
    CONVERTED_SUFFIX,
    DEFAULT_TIMEOUT,
    ENCODER_BINARY,
    ENCODER_MISSING_NOTICE,
    PROBE_BINARY,
    STATUS_FAIL,
    STATUS_OK,
    STATUS_SKIP,
    TARGET_EXTENSION,
    TARGET_MIME_TYPE,
    VIDEO_CODEC,
    VIDEO_EXTENSIONS,
    VIDEO_MIME_PREFIX,
)
from .logger import LogLevel

__all__ = [
    "AUDIO_CODEC",
    "CONVERTED_SUFFIX",
    "DEFAULT_TIMEOUT",
    "ENCODER_BINARY",
    "ENCODER_MISSING_NOTICE",
    "PROBE_BINARY",
    "STATUS_FAIL",
    "STATUS_OK",
    "STATUS_SKIP",
    "TARGET_EXTENSION",
    "TARGET_MIME_TYPE",
    "VIDEO_CODEC",
    "VIDEO_EXTENSIONS",
    "VIDEO_MIME_PREFIX",
    "LogLevel",
]
