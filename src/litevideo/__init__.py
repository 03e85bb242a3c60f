"""
Web-optimized video conversion for media libraries.

This package transcodes uploaded video files to WebM (VP9 video, Opus audio)
by shelling out to ffmpeg, swaps the stored file reference when the
conversion succeeds, and can replay the same conversion across an existing
media library.

The package is organized into several categories:
- convert: single-file conversion, batch driving, and media probing.
- host: upload hook, privileged batch entry point, and a JSON manifest library.
- settings: runtime configuration read from the environment.
- utils: constants, structured logging, and system helpers.
"""

__version__ = "1.0.0"

# Debug flag for controlling verbose output
DEBUG: bool = False

__all__ = ["__version__", "DEBUG"]
