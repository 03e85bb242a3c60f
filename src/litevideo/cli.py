"""
Command line front end for LiteVideo.

Subcommands:
    check     report whether the encoder can be run
    convert   convert one file in place, as an upload would be
    scan      register every video under a folder in a JSON manifest
    batch     convert every video attachment listed in a manifest
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

import litevideo as litevideo_module
from litevideo import host
from litevideo.convert import core, iter_video_files, summarize
from litevideo.errors import LiteVideoError
from litevideo.settings import Config, parse_timeout
from litevideo.utils import logger, file_util, LogLevel, STATUS_FAIL, STATUS_OK, STATUS_SKIP

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_STARTUP = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="litevideo",
        description="Convert uploaded videos to WebM (VP9 + Opus) with ffmpeg.",
        epilog="Example: litevideo scan ./uploads --manifest media.json && litevideo batch media.json",
    )
    parser.add_argument("--encoder", help="Encoder binary to run (default: ffmpeg or $LITEVIDEO_ENCODER)")
    parser.add_argument("--timeout", help="Seconds before an encoder run is killed; 0 disables the limit")
    parser.add_argument("--disable", action="store_true", help="Treat conversion as switched off")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {litevideo_module.__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("check", help="Check that the encoder is installed")

    p_convert = sub.add_parser("convert", help="Convert a single file")
    p_convert.add_argument("file", help="Video file to convert")
    p_convert.add_argument("--mime", help="MIME type of the file (default: guessed from the extension)")

    p_scan = sub.add_parser("scan", help="Add every video under a folder to a manifest")
    p_scan.add_argument("root", help="Folder to scan recursively")
    p_scan.add_argument("--manifest", required=True, help="Manifest file to create or extend")
    p_scan.add_argument("--base-url", help="Public URL prefix that maps onto ROOT")

    p_batch = sub.add_parser("batch", help="Convert every video attachment in a manifest")
    p_batch.add_argument("manifest", help="Manifest file produced by 'scan'")
    p_batch.add_argument("--no-progress", action="store_true", help="Hide the progress bar")

    return parser


def _config_from_args(args) -> Config:
    config = Config.from_env()
    if args.encoder:
        config = replace(config, encoder=args.encoder)
    if args.timeout is not None:
        config = replace(config, timeout=parse_timeout(args.timeout))
    if args.disable:
        config = replace(config, conversion_enabled=False)
    return config


def _cmd_check(args, config: Config) -> int:
    notice = host.encoder_notice(config)
    if notice:
        logger.safe_print(notice, file=sys.stderr)
        return EXIT_FAILURES
    logger.safe_print(f"{config.encoder} is available.")
    return EXIT_OK


def _cmd_convert(args, config: Config) -> int:
    src = Path(args.file).expanduser().resolve()
    mime = args.mime or file_util.guess_mime_type(src)
    result = core.convert(core.ConversionRequest(src, mime), config)
    if result.ok:
        logger.safe_print(f"[{result.status}] {src} -> {result.output_path}")
        return EXIT_OK
    logger.safe_print(f"[{result.status}] {src}")
    if result.outcome is core.Outcome.FAILED and args.debug and result.raw_output:
        logger.safe_print(result.raw_output, file=sys.stderr)
    return EXIT_FAILURES if result.outcome is core.Outcome.FAILED else EXIT_OK


def _cmd_scan(args, config: Config) -> int:
    root = Path(args.root).expanduser().resolve()
    if not root.is_dir():
        logger.log("startup.error", LogLevel.ERROR, msg="Folder does not exist", root=str(root))
        return EXIT_STARTUP

    library = host.ManifestLibrary(Path(args.manifest), probe_binary=config.probe)
    known = {library.resolve(e["file"]) for _, e in library.iter_entries()}
    next_id = max((int(k) for k in library.attachments if k.isdigit()), default=0) + 1

    added = 0
    for path in iter_video_files(root):
        if path in known:
            continue
        url = None
        if args.base_url:
            url = args.base_url.rstrip("/") + "/" + path.relative_to(root).as_posix()
        library.add(str(next_id), path, url=url)
        next_id += 1
        added += 1

    library.save()
    logger.log("scan.complete", LogLevel.INFO, root=str(root), added=added, total=len(library.attachments))
    return EXIT_OK


def _cmd_batch(args, config: Config) -> int:
    manifest = Path(args.manifest).expanduser().resolve()
    if not manifest.is_file():
        logger.log("startup.error", LogLevel.ERROR, msg="Manifest does not exist", path=str(manifest))
        return EXIT_STARTUP

    notice = host.encoder_notice(config)
    if notice and config.conversion_enabled:
        logger.safe_print(notice, file=sys.stderr)

    library = host.ManifestLibrary(manifest, probe_binary=config.probe)
    # A local operator running the CLI holds the manage capability.
    results = host.run_batch_conversion(library, config, can_manage=True, progress=not args.no_progress)

    for r in results:
        if r.result.ok:
            logger.safe_print(f"[{r.result.status}] {r.source_path} -> {r.result.output_path}")
        else:
            logger.safe_print(f"[{r.result.status}] {r.source_path}")

    counts = summarize(results)
    logger.safe_print(f"\nDone. OK={counts[STATUS_OK]} SKIP={counts[STATUS_SKIP]} FAIL={counts[STATUS_FAIL]}")
    return EXIT_FAILURES if counts[STATUS_FAIL] else EXIT_OK


_COMMANDS = {
    "check": _cmd_check,
    "convert": _cmd_convert,
    "scan": _cmd_scan,
    "batch": _cmd_batch,
}


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    litevideo_module.DEBUG = args.debug
    logger.set_log_level(LogLevel.DEBUG if args.debug else LogLevel.INFO)

    try:
        config = _config_from_args(args)
        return _COMMANDS[args.command](args, config)
    except LiteVideoError as e:
        logger.log("startup.error", LogLevel.ERROR, msg=str(e))
        return EXIT_STARTUP


if __name__ == "__main__":
    sys.exit(main())
