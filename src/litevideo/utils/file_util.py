"""
Path helpers for converted files.

Output paths keep the source directory and base name and only swap the
extension. Public URLs are rewritten the same way so the stored link keeps
pointing at the converted file.
"""
import mimetypes
from pathlib import Path

from litevideo.utils.constants import CONVERTED_SUFFIX, TARGET_EXTENSION

# Not every platform mime.types table knows these
mimetypes.add_type("video/x-matroska", ".mkv")
mimetypes.add_type("video/webm", ".webm")
mimetypes.add_type("video/x-m4v", ".m4v")


def derive_output_path(src: Path, extension: str = TARGET_EXTENSION) -> Path:
    """
    Return the converted file path for ``src``.

    ``clip.mp4`` becomes ``clip.webm`` in the same directory. A source that
    already carries the target extension gets a ``-converted`` stem so the
    encoder never writes over its own input.
    """
    suffix = "." + extension.lstrip(".")
    if src.suffix.lower() == suffix.lower():
        return src.with_name(f"{src.stem}{CONVERTED_SUFFIX}{suffix}")
    return src.with_suffix(suffix)


def swap_url_basename(url: str, old_name: str, new_name: str) -> str:
    """Replace the file name at the end of ``url``."""
    head, sep, tail = url.rpartition("/")
    if tail == old_name:
        return f"{head}{sep}{new_name}"
    return url.replace(old_name, new_name)


def guess_mime_type(path: Path) -> str:
    """Guess a MIME type from the file extension, defaulting to octet-stream."""
    mime, _ = mimetypes.guess_type(path.name)
    return mime or "application/octet-stream"
