"""
Host-side collaborators for the conversion core.

The core only knows about paths and results. This module adapts it to a media
host: the upload hook rewrites an upload record after conversion, the batch
entry point walks every video attachment behind a capability check, and
``ManifestLibrary`` is a JSON-file attachment store that lets the whole flow
run without a CMS.
"""
import json
from pathlib import Path
from typing import Callable, Iterator, Optional, Protocol, Union

from litevideo.convert import batch, core, probe
from litevideo.errors import ManifestError
from litevideo.settings import Config
from litevideo.utils import file_util, logger, LogLevel, ENCODER_MISSING_NOTICE, VIDEO_MIME_PREFIX


class MediaLibrary(batch.AttachmentStore, Protocol):
    """A store that can also enumerate its video attachments."""

    def iter_video_attachments(self) -> Iterator[batch.BatchItem]:
        ...


def handle_upload(upload: dict, config: Config) -> dict:
    """
    Convert a freshly uploaded file and return the upload record to persist.

    ``upload`` carries ``file``, ``url`` and ``type``. When the conversion
    succeeds a copy is returned pointing at the converted file; in every other
    case the original record is returned unchanged.
    """
    request = core.ConversionRequest(Path(upload["file"]), upload.get("type", ""))
    result = core.convert(request, config)
    if not result.ok:
        return upload

    new_path = result.output_path
    updated = dict(upload)
    updated["file"] = str(new_path)
    if upload.get("url"):
        updated["url"] = file_util.swap_url_basename(upload["url"], request.source_path.name, new_path.name)
    updated["type"] = config.target_mime_type
    logger.log("upload.converted", LogLevel.INFO, file=request.source_path.name, dst=new_path.name)
    return updated


def run_batch_conversion(library: MediaLibrary, config: Config,
                         can_manage: Union[bool, Callable[[], bool]],
                         progress: bool = False) -> Optional[list[batch.BatchItemResult]]:
    """Convert every video attachment in ``library``; requires ``can_manage``."""
    allowed = can_manage() if callable(can_manage) else can_manage
    if not allowed:
        logger.log("batch.denied", LogLevel.WARN, msg="caller lacks the manage capability")
        return None
    return batch.batch_convert(library.iter_video_attachments(), config, library, progress=progress)


def encoder_notice(config: Config) -> Optional[str]:
    """Admin notice to show when the encoder cannot be run, else None."""
    if core.is_encoder_available(config):
        return None
    logger.log("encoder.unavailable", LogLevel.WARN, encoder=config.encoder)
    return ENCODER_MISSING_NOTICE


class ManifestLibrary:
    """
    Attachment store backed by a JSON manifest.

    Layout::

        {"attachments": {"<id>": {"file": ..., "url": ..., "type": ..., "metadata": {...}}}}

    Relative ``file`` entries are resolved against the manifest's directory.
    Changes are written back by ``save``; ``update_attached_file`` saves
    immediately so a crash mid-batch never leaves a stale reference behind.
    """

    def __init__(self, path: Path, probe_binary: Optional[str] = None):
        self.path = Path(path)
        self.probe_binary = probe_binary
        self.attachments: dict[str, dict] = {}
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ManifestError(f"Cannot read manifest {self.path}: {e}") from e
        attachments = data.get("attachments") if isinstance(data, dict) else None
        if not isinstance(attachments, dict):
            raise ManifestError(f"Manifest {self.path} has no 'attachments' object")
        self.attachments = {str(k): v for k, v in attachments.items()}

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps({"attachments": self.attachments}, indent=2, sort_keys=True), encoding="utf-8")
        tmp.replace(self.path)

    def add(self, external_id: str, file: Path, mime_type: Optional[str] = None, url: Optional[str] = None) -> None:
        file = Path(file)
        self.attachments[str(external_id)] = {
            "file": str(file),
            "url": url,
            "type": mime_type or file_util.guess_mime_type(file),
            "metadata": {},
        }

    def get(self, external_id: str) -> dict:
        try:
            return self.attachments[str(external_id)]
        except KeyError:
            raise ManifestError(f"Unknown attachment id: {external_id}") from None

    def resolve(self, file: str) -> Path:
        p = Path(file)
        return p if p.is_absolute() else self.path.parent / p

    def iter_entries(self) -> Iterator[tuple[str, dict]]:
        """Yield well-formed attachments; entries without a file path are logged and skipped."""
        for external_id, entry in self.attachments.items():
            if not isinstance(entry, dict) or not isinstance(entry.get("file"), str) or not entry["file"]:
                logger.log("library.invalid_entry", LogLevel.WARN, id=external_id, manifest=str(self.path))
                continue
            yield external_id, entry

    def iter_video_attachments(self) -> Iterator[batch.BatchItem]:
        for external_id, entry in self.iter_entries():
            mime = entry.get("type") or ""
            if not mime.startswith(VIDEO_MIME_PREFIX):
                continue
            yield batch.BatchItem(
                source_path=self.resolve(entry["file"]),
                mime_type=mime,
                external_id=external_id,
                url=entry.get("url"),
            )

    def update_attached_file(self, external_id: str, new_path: Path, new_url: Optional[str],
                             new_mime_type: str) -> None:
        entry = self.get(external_id)
        entry["file"] = self._stored_path(entry.get("file"), Path(new_path))
        if new_url is not None:
            entry["url"] = new_url
        entry["type"] = new_mime_type
        self.save()
        logger.log("library.update", LogLevel.INFO, id=external_id, file=Path(new_path).name)

    def _stored_path(self, previous: Optional[str], new_path: Path) -> str:
        """Keep the new path relative when the entry it replaces was relative."""
        if previous and not Path(previous).is_absolute():
            try:
                return new_path.relative_to(self.path.parent).as_posix()
            except ValueError:
                pass
        return str(new_path)

    def regenerate_metadata(self, external_id: str, new_path: Path) -> None:
        entry = self.get(external_id)
        new_path = Path(new_path)
        metadata = {"filesize": new_path.stat().st_size if new_path.exists() else None}
        info = probe.probe_media(new_path, self.probe_binary) if self.probe_binary else None
        if info:
            metadata.update(info.as_metadata())
        entry["metadata"] = metadata
        self.save()
