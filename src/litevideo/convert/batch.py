"""
This module drives conversions across many files and discovers video files
on disk.

``batch_convert`` runs the single-file converter over an ordered list of
items. Each successful conversion is reported to the storage collaborator so
it can point its stored reference at the new file; skipped and failed items
leave the store untouched. A failure never stops the remaining items.
"""
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Optional, Protocol

from tqdm import tqdm

from litevideo.errors import LiteVideoError
from litevideo.settings import Config
from litevideo.utils import logger, file_util, LogLevel, STATUS_FAIL, STATUS_OK, STATUS_SKIP, VIDEO_EXTENSIONS
from . import core


class AttachmentStore(Protocol):
    """Host-side persistence for converted file references."""

    def update_attached_file(self, external_id: str, new_path: Path, new_url: Optional[str],
                             new_mime_type: str) -> None:
        ...

    def regenerate_metadata(self, external_id: str, new_path: Path) -> None:
        ...


@dataclass(frozen=True)
class BatchItem:
    source_path: Path
    mime_type: str
    external_id: str
    url: Optional[str] = None


@dataclass(frozen=True)
class BatchItemResult:
    external_id: str
    source_path: Path
    result: core.ConversionResult


def batch_convert(items: Iterable[BatchItem], config: Config, store: AttachmentStore,
                  progress: bool = False) -> list[BatchItemResult]:
    """Convert each item in order and notify ``store`` for every success."""
    items = list(items)
    logger.log("batch.start", LogLevel.INFO, items=len(items), enabled=config.conversion_enabled)

    results: list[BatchItemResult] = []
    for item in tqdm(items, desc="Converting videos", disable=not progress):
        request = core.ConversionRequest(Path(item.source_path), item.mime_type)
        result = core.convert(request, config)

        if result.ok:
            result = _notify_store(store, item, request, result, config)

        logger.log("batch.item", LogLevel.INFO if result.ok else LogLevel.DEBUG,
                   id=item.external_id,
                   file=request.source_path.name,
                   status=result.status)
        results.append(BatchItemResult(item.external_id, request.source_path, result))

    counts = summarize(results)
    logger.log("batch.end", LogLevel.INFO,
               ok=counts[STATUS_OK],
               skip=counts[STATUS_SKIP],
               fail=counts[STATUS_FAIL])
    return results


def _notify_store(store: AttachmentStore, item: BatchItem, request: core.ConversionRequest,
                  result: core.ConversionResult, config: Config) -> core.ConversionResult:
    """Record a converted file with the host; a store error fails only this item."""
    new_path = result.output_path
    new_url = None
    if item.url:
        new_url = file_util.swap_url_basename(item.url, request.source_path.name, new_path.name)
    try:
        store.update_attached_file(item.external_id, new_path, new_url, config.target_mime_type)
        store.regenerate_metadata(item.external_id, new_path)
    except (LiteVideoError, OSError) as e:
        logger.log("batch.store_failed", LogLevel.ERROR,
                   id=item.external_id,
                   file=str(request.source_path),
                   dst=str(new_path),
                   error=str(e))
        return replace(result, outcome=core.Outcome.FAILED, reason=core.FailureReason.STORE_ERROR)
    return result


def summarize(results: Iterable[BatchItemResult]) -> dict[str, int]:
    """Count results by outcome."""
    counts = {STATUS_OK: 0, STATUS_SKIP: 0, STATUS_FAIL: 0}
    for r in results:
        if r.result.outcome is core.Outcome.SUCCESS:
            counts[STATUS_OK] += 1
        elif r.result.outcome is core.Outcome.SKIPPED:
            counts[STATUS_SKIP] += 1
        else:
            counts[STATUS_FAIL] += 1
    return counts


def iter_video_files(root: Path) -> list[Path]:
    """Find all video files recursively, in a stable order."""
    files = []
    for p in sorted(root.rglob("*")):
        if p.is_file() and p.suffix.lower() in VIDEO_EXTENSIONS:
            files.append(p)
    return files
