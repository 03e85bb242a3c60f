"""Video conversion for uploaded media.

This package provides two levels of functionality:
- core: single-file conversion (request/result types, encoder command, availability check)
- batch: conversion across many files with storage notifications, and file discovery
- probe: ffprobe stream information used to rebuild attachment metadata
"""

from .core import (
    ConversionRequest,
    ConversionResult,
    FailureReason,
    Outcome,
    SkipReason,
    build_encoder_cmd,
    convert,
    is_encoder_available,
)
from .batch import (
    AttachmentStore,
    BatchItem,
    BatchItemResult,
    batch_convert,
    iter_video_files,
    summarize,
)
from .probe import MediaInfo, probe_media

__all__ = [
    # Single file
    "ConversionRequest",
    "ConversionResult",
    "FailureReason",
    "Outcome",
    "SkipReason",
    "build_encoder_cmd",
    "convert",
    "is_encoder_available",
    # Batch
    "AttachmentStore",
    "BatchItem",
    "BatchItemResult",
    "batch_convert",
    "iter_video_files",
    "summarize",
    # Probing
    "MediaInfo",
    "probe_media",
]
