"""Command-line interface for loading and checking Beat Saber map bundles."""

import argparse
import logging
import sys
from pathlib import Path

from beat_bundle.errors import BundleError
from beat_bundle.pipeline.config import LoaderConfig
from beat_bundle.pipeline.loader import BundleLoader

logger = logging.getLogger(__name__)


def _build_config(args: argparse.Namespace) -> LoaderConfig:
    config = LoaderConfig()
    if args.config:
        config = LoaderConfig.load(Path(args.config))
    if getattr(args, "workers", None) is not None:
        config.workers = args.workers
    if getattr(args, "probe_audio", False):
        config.probe_audio = True
    return config


def _count_objects(document) -> str:
    if hasattr(document, "color_notes"):
        return (
            f"{len(document.color_notes)} notes, {len(document.bomb_notes)} bombs, "
            f"{len(document.obstacles)} obstacles"
        )
    return f"{len(document.notes)} notes, {len(document.obstacles)} obstacles"


def cmd_inspect(args: argparse.Namespace) -> int:
    loader = BundleLoader(_build_config(args))
    try:
        bundle = loader.load(args.reference)
    except BundleError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    info = bundle.info
    print(f"{info.song_name} - {info.song_author_name} (mapped by {info.level_author_name})")
    print(f"  info version {info.version}, {info.beats_per_minute:g} BPM")
    if bundle.key:
        print(f"  BeatSaver key: {bundle.key}")
    if loader.config.probe_audio:
        length = f"{bundle.length:.1f}s" if bundle.length is not None else "unknown"
        print(f"  length: {length}")
    for characteristic, ranks in bundle.difficulties.items():
        print(f"  {characteristic.value}:")
        for rank in sorted(ranks):
            document = ranks[rank]
            print(f"    rank {int(rank)} (v{document.version}): {_count_objects(document)}")
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    from tqdm import tqdm

    config = _build_config(args)
    loader = BundleLoader(config)
    root = Path(args.input)
    info_files = sorted(
        {p for name in config.info_filenames for p in root.rglob(name)}
    )

    loaded = 0
    failures: list[tuple[Path, str]] = []
    for info_path in tqdm(info_files, desc="Loading maps"):
        try:
            loader.load_info_file(info_path)
            loaded += 1
        except BundleError as exc:
            logger.debug("Failed to load %s", info_path, exc_info=True)
            failures.append((info_path.parent, str(exc)))

    for folder, message in failures:
        print(f"FAILED {folder}: {message}")
    print(f"Loaded {loaded} of {len(info_files)} maps under {root}")
    return 1 if failures else 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="beat-bundle",
        description="Load Beat Saber map bundles",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument("--config", default=None, help="Optional JSON loader config")
    sub = parser.add_subparsers(dest="command")

    # inspect
    ins = sub.add_parser("inspect", help="Load one map and summarise it")
    ins.add_argument("reference",
                     help="Map folder, Info.dat, .zip archive, BeatSaver key or URL")
    ins.add_argument("--probe-audio", action="store_true",
                     help="Read the song file and report its length")
    ins.add_argument("--workers", type=int, default=None,
                     help="Threads used to decode difficulties (default: sequential)")

    # scan
    sc = sub.add_parser("scan", help="Load every map folder under a directory")
    sc.add_argument("input", help="Directory to search for info files")
    sc.add_argument("--workers", type=int, default=None)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "inspect": cmd_inspect,
        "scan": cmd_scan,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
