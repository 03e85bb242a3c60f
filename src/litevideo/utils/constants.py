"""
Constants and default settings for video conversion.

This module contains the defaults used by the conversion core: the encoder
binary and codecs, the target container, the MIME prefix that marks a file as
video, and the status labels used in batch summaries. Values that operators
commonly change can be overridden through environment variables, and a local
`.env` file is loaded on import.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Encoder defaults
ENCODER_BINARY = os.getenv("LITEVIDEO_ENCODER", "ffmpeg")
PROBE_BINARY = os.getenv("LITEVIDEO_PROBE", "ffprobe")
VIDEO_CODEC = "vp9"
AUDIO_CODEC = "opus"

# Target container
TARGET_EXTENSION = "webm"
TARGET_MIME_TYPE = "video/webm"
CONVERTED_SUFFIX = "-converted"

# Uploads are only converted when their MIME type starts with this prefix
VIDEO_MIME_PREFIX = "video/"

# Wall-clock limit for a single encoder run, in seconds
DEFAULT_TIMEOUT = 3600.0

# Accepted video file extensions for directory scans
VIDEO_EXTENSIONS = {".mkv", ".mp4", ".avi", ".mov", ".m4v", ".webm", ".wmv", ".mpg", ".mpeg", ".ogv", ".3gp"}

# Messages shown to administrators
ENCODER_MISSING_NOTICE = "FFmpeg is not installed. Please install FFmpeg to use LiteVideo."

# Processing status codes
STATUS_OK = "OK"
STATUS_SKIP = "SKIP"
STATUS_FAIL = "FAIL"
