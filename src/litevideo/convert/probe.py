"""Read basic stream information from a media file with ffprobe."""
import json
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from litevideo.utils import system_util, PROBE_BINARY


@dataclass
class MediaInfo:
    codec: str
    width: Optional[int]
    height: Optional[int]
    duration: Optional[float] = None
    audio_codec: Optional[str] = None

    def as_metadata(self) -> dict:
        data = {"codec": self.codec, "width": self.width, "height": self.height}
        if self.duration is not None:
            data["length"] = self.duration
        if self.audio_codec:
            data["audio_codec"] = self.audio_codec
        return data


def probe_media(path: Path, ffprobe: str = PROBE_BINARY) -> Optional[MediaInfo]:
    """Probe a media file for codec, dimensions and duration."""
    cmd = [
        ffprobe, "-v", "error",
        "-show_entries",
        "stream=codec_type,codec_name,width,height:format=duration",
        "-of", "json",
        str(path)
    ]
    try:
        code, out, err = system_util.run_cmd(cmd, timeout=60)
    except (OSError, subprocess.SubprocessError):
        return None
    if code != 0:
        return None
    try:
        data = json.loads(out)
    except json.JSONDecodeError:
        return None

    streams = data.get("streams") or []
    video = next((s for s in streams if s.get("codec_type") == "video"), None)
    if video is None:
        return None
    audio = next((s for s in streams if s.get("codec_type") == "audio"), None)

    duration = None
    if "format" in data and "duration" in data["format"]:
        try:
            duration = float(data["format"]["duration"])
        except (ValueError, TypeError):
            pass

    return MediaInfo(
        codec=video.get("codec_name", ""),
        width=video.get("width"),
        height=video.get("height"),
        duration=duration,
        audio_codec=audio.get("codec_name") if audio else None,
    )
