"""Shared fixtures: a scriptable stand-in for the ffmpeg binary."""

from __future__ import annotations

import stat
from pathlib import Path
from typing import Callable

import pytest

from litevideo.settings import Config
from litevideo.utils import logger, LogLevel

_ENCODER_TEMPLATE = """#!/bin/sh
if [ "$1" = "-version" ]; then
    echo "ffmpeg version fake"
    exit {version_code}
fi
printf '%s\\n' "$@" > "{args_file}"
{sleep}
for last; do :; done
echo "fake encoder writing $last"
{write}
exit {exit_code}
"""


@pytest.fixture(autouse=True)
def _quiet_logs():
    logger.set_log_level(LogLevel.ERROR)
    yield
    logger.set_log_level(LogLevel.INFO)


@pytest.fixture
def make_encoder(tmp_path: Path) -> Callable[..., Path]:
    """Write an executable fake encoder and return its path.

    The script records its arguments in ``<name>.args`` next to itself,
    optionally writes ``payload`` to the last argument, then exits with
    ``exit_code``.
    """

    def _make(
        exit_code: int = 0,
        payload: str | None = "webm-bytes",
        sleep: float | None = None,
        version_code: int = 0,
        name: str = "ffmpeg",
    ) -> Path:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        script = bin_dir / name
        if payload is None:
            write = ""
        elif payload == "":
            write = ': > "$last"'
        else:
            write = f'printf "%s" "{payload}" > "$last"'
        script.write_text(
            _ENCODER_TEMPLATE.format(
                args_file=bin_dir / f"{name}.args",
                sleep=f"exec sleep {sleep}" if sleep else "",
                write=write,
                exit_code=exit_code,
                version_code=version_code,
            )
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


@pytest.fixture
def make_config() -> Callable[..., Config]:
    def _make(encoder: Path | str, **overrides) -> Config:
        overrides.setdefault("timeout", 30)
        overrides.setdefault("probe", None)
        return Config(encoder=str(encoder), **overrides)

    return _make


@pytest.fixture
def video(tmp_path: Path) -> Path:
    media = tmp_path / "media"
    media.mkdir()
    src = media / "clip.mp4"
    src.write_bytes(b"original-mp4")
    return src
