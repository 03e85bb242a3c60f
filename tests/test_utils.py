"""Tests for path helpers, subprocess helpers and the structured logger."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from litevideo.utils import file_util, logger, system_util, LogLevel


@pytest.mark.parametrize(
    ("src", "expected"),
    [
        ("/up/clip.mp4", "/up/clip.webm"),
        ("/up/2024/my.video.MOV", "/up/2024/my.video.webm"),
        ("/up/mp4/clip.mp4", "/up/mp4/clip.webm"),
        ("/up/clip.webm", "/up/clip-converted.webm"),
        ("/up/clip.WEBM", "/up/clip-converted.webm"),
    ],
)
def test_derive_output_path(src: str, expected: str) -> None:
    """Swap only the extension and never return the input path."""
    assert file_util.derive_output_path(Path(src)) == Path(expected)


def test_swap_url_basename() -> None:
    assert file_util.swap_url_basename("https://x/mp4/a.mp4", "a.mp4", "a.webm") == "https://x/mp4/a.webm"
    assert file_util.swap_url_basename("https://x/a.mp4?v=2", "a.mp4", "a.webm") == "https://x/a.webm?v=2"


@pytest.mark.parametrize(("name", "mime"), [("a.mp4", "video/mp4"), ("a.mkv", "video/x-matroska"),
                                            ("a.unknownext", "application/octet-stream")])
def test_guess_mime_type(name: str, mime: str) -> None:
    assert file_util.guess_mime_type(Path(name)) == mime


def test_run_cmd_merges_output(tmp_path) -> None:
    """Fold stderr into stdout when asked."""
    code, out, err = system_util.run_cmd(["sh", "-c", "echo out; echo err >&2; exit 4"], merge_output=True)
    assert code == 4
    assert "out" in out and "err" in out
    assert err == ""


def test_run_cmd_raises_for_missing_binary(tmp_path) -> None:
    with pytest.raises(OSError):
        system_util.run_cmd([str(tmp_path / "nope")])


def test_format_entry_escapes_values() -> None:
    """Render key=value pairs on a single line."""
    line = logger.format_entry("convert.failed", LogLevel.ERROR, file='a "b".mp4', code=1, ok=False,
                               err="x\ny", dst=None)
    assert re.match(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} \| \[ERROR\] \| convert\.failed \| ", line)
    assert 'file="a \\"b\\".mp4"' in line
    assert "code=1" in line
    assert "ok=false" in line
    assert 'err="x\\ny"' in line
    assert "dst=null" in line
    assert "\n" not in line


def test_log_respects_level(capsys) -> None:
    """Drop entries below the current threshold."""
    logger.set_log_level(LogLevel.WARN)
    logger.log("convert.start", LogLevel.INFO, file="a.mp4")
    logger.log("convert.delete_failed", LogLevel.WARN, file="a.mp4")

    out = capsys.readouterr().out
    assert "convert.start" not in out
    assert "convert.delete_failed" in out
    assert 'thread="main"' in out
