"""
phocus-import command line

Usage:
  phocus-import --3fr /path/to/XXXX.3FR [--exifbin /path/to/exif.bin] [--ts <unix_seconds>]
  phocus-import /path/to/XXXX.3FR
  phocus-import /path/to/folder

Single-file mode stops on the first fatal error. Batch mode accepts no
options, imports every .3FR in the folder and always exits 0 once the store
is open.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import tomli
from loguru import logger

from .api import import_directory, import_raw_file
from .catalog.store import CatalogStore
from .config import ImporterConfig, load_config
from .errors import ImporterError
from .log import init_logging
from .models.import_result import DuplicatePolicy
from .version import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="phocus-import",
        description="Import Hasselblad .3FR files into Phocus 2 by writing files and a catalog record.",
    )
    parser.add_argument("--3fr", dest="raw_file", metavar="FILE", help="import a single .3FR file")
    parser.add_argument(
        "--exifbin",
        metavar="FILE",
        help="use this pre-encoded EXIF record instead of reading the raw file",
    )
    parser.add_argument("--ts", type=int, metavar="INT", help="unix timestamp for the image ID (default: now)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("paths", nargs="*", metavar="PATH", help="a folder to batch import, or a single .3FR")
    return parser


def _print_locations(config: ImporterConfig) -> None:
    logger.info("Raw directory: {}", config.raw_dir)
    logger.info("Preview cache: {}", config.preview_dir)
    logger.info("Catalog store: {}", config.store_path)


def _run_single(config: ImporterConfig, store: CatalogStore, raw_file: Path,
                exif_blob: Optional[bytes], timestamp: Optional[int]) -> int:
    result = import_raw_file(
        raw_file,
        config,
        store,
        timestamp=timestamp,
        exif_blob=exif_blob,
        duplicate_policy=DuplicatePolicy.STRICT,
    )
    if not result.success:
        logger.error(result.error)
        return 1
    _print_locations(config)
    return 0


def _run_batch(config: ImporterConfig, store: CatalogStore, directory: Path) -> int:
    summary = import_directory(directory, config, store)
    logger.info("Batch import complete: succeeded={} failed/skipped={}", summary.succeeded, summary.failed)
    _print_locations(config)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the importer.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    init_logging()

    if len(args.paths) > 1:
        logger.error("Batch mode takes exactly one folder path (see --help)")
        return 1

    raw_file = Path(args.raw_file) if args.raw_file else None
    batch_dir = Path(args.paths[0]) if args.paths else None

    # A lone positional file is treated like --3fr
    if raw_file is None and batch_dir is not None and batch_dir.is_file():
        raw_file, batch_dir = batch_dir, None

    if batch_dir is not None and (raw_file is not None or args.exifbin or args.ts is not None):
        logger.error("Batch mode takes no options; use: phocus-import /path/to/folder")
        return 1

    if raw_file is None and batch_dir is None:
        parser.print_help()
        return 1

    exif_blob = None
    if args.exifbin:
        exifbin = Path(args.exifbin)
        if not exifbin.is_file():
            logger.error("EXIF blob not found: {}", exifbin)
            return 1
        try:
            exif_blob = exifbin.read_bytes()
        except OSError as e:
            logger.error("Cannot read EXIF blob {}: {}", exifbin, e)
            return 1

    try:
        config = load_config()
    except (ImporterError, tomli.TOMLDecodeError) as e:
        logger.error(str(e))
        return 1

    init_logging(config.log_level, config.log_dir)
    logger.info("Bundle ID: {}", config.bundle_id)
    logger.info("Container: {}", config.container_root)

    try:
        with CatalogStore.open(config.store_path, schema_version=config.schema_version) as store:
            config.ensure_dirs()
            if raw_file is not None:
                return _run_single(config, store, raw_file, exif_blob, args.ts)
            return _run_batch(config, store, batch_dir)
    except (ImporterError, OSError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
