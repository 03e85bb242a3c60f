"""
Functions to convert a single video file to WebM with ffmpeg.

This module builds the encoder command line, runs the encoder as a blocking
child process, validates what it produced, and removes the source file only
when the converted file is in place. Every outcome, including a missing
encoder or a timeout, is returned as a ``ConversionResult``; nothing here
raises for a per-file problem.
"""
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, List

from litevideo.settings import Config
from litevideo.utils import file_util, logger, system_util, LogLevel, VIDEO_MIME_PREFIX


class Outcome(Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


class SkipReason(Enum):
    DISABLED = "disabled"
    NOT_VIDEO = "not_video"


class FailureReason(Enum):
    BINARY_MISSING = "binary_missing"
    NON_ZERO_EXIT = "non_zero_exit"
    MISSING_OUTPUT = "missing_output"
    TIMEOUT = "timeout"
    SOURCE_MISSING = "source_missing"
    DELETE_ERROR = "delete_error"
    STORE_ERROR = "store_error"


@dataclass(frozen=True)
class ConversionRequest:
    source_path: Path
    mime_type: str

    def __post_init__(self):
        object.__setattr__(self, "source_path", Path(self.source_path))
        object.__setattr__(self, "mime_type", self.mime_type or "")

    @property
    def is_video(self) -> bool:
        return self.mime_type.startswith(VIDEO_MIME_PREFIX)


@dataclass(frozen=True)
class ConversionResult:
    """
    What happened to one file.

    ``output_path`` is set on success and whenever the converted file exists
    but the swap did not complete: ``DELETE_ERROR`` (the original could not be
    removed) and ``STORE_ERROR`` (the host could not record the new file).
    ``reason`` holds a ``SkipReason`` or ``FailureReason`` for anything but
    success.
    """
    outcome: Outcome
    output_path: Optional[Path] = None
    exit_code: Optional[int] = None
    raw_output: Optional[str] = None
    reason: Optional[Enum] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def status(self) -> str:
        """Short label for summaries, e.g. ``FAILED (non_zero_exit)``."""
        if self.reason is None:
            return self.outcome.name
        return f"{self.outcome.name} ({self.reason.value})"


def build_encoder_cmd(src: Path, dst: Path, config: Config) -> List[str]:
    """Build the encoder command for converting ``src`` into ``dst``."""
    return [
        config.encoder,
        "-y",
        "-i", str(src),
        "-c:v", config.video_codec,
        "-c:a", config.audio_codec,
        str(dst),
    ]


def is_encoder_available(config: Config) -> bool:
    """Return True when the encoder can be started and reports its version."""
    try:
        code, _, _ = system_util.run_cmd([config.encoder, "-version"], timeout=30)
    except (OSError, subprocess.SubprocessError):
        return False
    return code == 0


def _skip(request: ConversionRequest, reason: SkipReason) -> ConversionResult:
    logger.log("convert.skip", LogLevel.DEBUG,
               file=request.source_path.name,
               mime=request.mime_type,
               reason=reason.value)
    return ConversionResult(Outcome.SKIPPED, reason=reason)


def _fail(request: ConversionRequest, reason: FailureReason, exit_code: Optional[int] = None,
          raw_output: Optional[str] = None, output_path: Optional[Path] = None) -> ConversionResult:
    logger.log("convert.failed", LogLevel.ERROR,
               file=request.source_path.name,
               reason=reason.value,
               exit_code=exit_code,
               error=(raw_output or "")[-200:])
    return ConversionResult(Outcome.FAILED, output_path=output_path, exit_code=exit_code,
                            raw_output=raw_output, reason=reason)


def convert(request: ConversionRequest, config: Config) -> ConversionResult:
    """
    Convert one video file to the target container.

    Args:
        request: Source file and its MIME type
        config: Encoder settings and the conversion toggle

    Returns:
        A ``ConversionResult``. The source file is deleted only on success.
        A partially written output is left on disk when the encoder fails.
    """
    if not config.conversion_enabled:
        return _skip(request, SkipReason.DISABLED)
    if not request.is_video:
        return _skip(request, SkipReason.NOT_VIDEO)

    src = request.source_path
    if not src.is_file():
        return _fail(request, FailureReason.SOURCE_MISSING, raw_output=f"source not found: {src}")

    if system_util.find_binary(config.encoder) is None:
        return _fail(request, FailureReason.BINARY_MISSING, raw_output=f"binary not found: {config.encoder}")

    dst = file_util.derive_output_path(src, config.target_extension)
    cmd = build_encoder_cmd(src, dst, config)

    logger.log("convert.start", LogLevel.INFO,
               file=src.name,
               dst=dst.name,
               video=config.video_codec,
               audio=config.audio_codec)
    logger.log("convert.cmd", LogLevel.DEBUG, cmd=" ".join(cmd))

    try:
        code, out, _ = system_util.run_cmd(cmd, timeout=config.timeout, merge_output=True)
    except subprocess.TimeoutExpired as e:
        partial = e.output.decode(errors="replace") if isinstance(e.output, bytes) else (e.output or "")
        return _fail(request, FailureReason.TIMEOUT,
                     raw_output=partial + f"\nencoder timed out after {config.timeout}s")
    except OSError as e:
        # Found on PATH but could not be executed
        return _fail(request, FailureReason.BINARY_MISSING, raw_output=f"binary not found: {config.encoder} ({e})")

    if code != 0:
        return _fail(request, FailureReason.NON_ZERO_EXIT, exit_code=code, raw_output=out)

    if not dst.is_file() or dst.stat().st_size == 0:
        return _fail(request, FailureReason.MISSING_OUTPUT, exit_code=code, raw_output=out)

    try:
        src.unlink()
    except OSError as e:
        logger.log("convert.delete_failed", LogLevel.WARN,
                   file=src.name,
                   dst=dst.name,
                   error=str(e))
        return ConversionResult(Outcome.FAILED, output_path=dst, exit_code=code,
                                raw_output=out, reason=FailureReason.DELETE_ERROR)

    logger.log("convert.complete", LogLevel.INFO,
               file=src.name,
               dst=dst.name,
               size=dst.stat().st_size)
    return ConversionResult(Outcome.SUCCESS, output_path=dst, exit_code=code, raw_output=out)
