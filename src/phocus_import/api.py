"""
High-level API for phocus-import

Imports one .3FR file, or every .3FR in a directory, into the host
application's storage:

    raw file -> metadata -> patched raw copy + placeholders -> catalog record

Files placed on disk are not removed if a later step fails. Only the store
write is transactional.
"""

import shutil
import time
from pathlib import Path
from typing import Callable, Optional, Tuple

from loguru import logger
from pydantic import ValidationError

from .catalog.builder import CatalogEntryBuilder
from .catalog.store import CatalogStore
from .config import ImporterConfig
from .errors import DuplicateKeyError, ImporterError, InputPathError, NoInputFilesError
from .image.formats import FormatDetector
from .image.header_patcher import HeaderPatcher
from .metadata.exif_record import ExifRecord
from .metadata.raw_extractor import RawMetadataExtractor
from .models.import_result import (
    BatchSummary,
    DuplicatePolicy,
    ImportResult,
    ImportStage,
    ImportStatus,
)
from .preview.placeholder import PlaceholderGenerator
from .validation.raw_validator import RawFileValidator


def resolve_metadata(raw_path: Path, exif_blob: Optional[bytes] = None) -> Tuple[bytes, str, str, str]:
    """
    Produce the metadata blob and the fields derived from it.

    A caller-supplied blob is stored verbatim. If it decodes as an
    ExifRecord, its device, date and offset are used; otherwise they are
    left empty.

    Args:
        raw_path: Source raw file (read only when no blob is supplied)
        exif_blob: Optional pre-encoded ExifRecord

    Returns:
        (exif_data, device_name, date_time_original, offset)

    Raises:
        UnsupportedFormatError: If extraction is needed and the file is unreadable
    """
    if exif_blob is not None:
        try:
            decoded = ExifRecord.from_bytes(exif_blob)
        except ValidationError:
            logger.warning(
                "Supplied EXIF blob does not decode as an EXIF record; "
                "storing it as-is with empty device/date/offset"
            )
            return bytes(exif_blob), "", "", ""
        return bytes(exif_blob), decoded.device, decoded.date_time_original, decoded.offset_time_original

    metadata = RawMetadataExtractor.extract(raw_path)
    logger.info("Read EXIF from {}", raw_path.name)
    return metadata.record.to_bytes(), metadata.device_name, metadata.date_time_original, metadata.offset


def _copy_replace(src: Path, dst: Path) -> None:
    if dst.exists():
        dst.unlink()
    shutil.copy2(src, dst)


def import_raw_file(
    raw_path: Path,
    config: ImporterConfig,
    store: CatalogStore,
    timestamp: Optional[int] = None,
    exif_blob: Optional[bytes] = None,
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.STRICT,
) -> ImportResult:
    """
    Import one raw file.

    Pipeline: validate, resolve metadata, check for a duplicate ID, copy and
    patch the raw file, write placeholders, build the record, commit.

    Args:
        raw_path: Path to .3FR file
        config: Resolved run configuration
        store: Open catalog store
        timestamp: Unix timestamp for the image ID (default: now)
        exif_blob: Optional pre-encoded metadata used instead of extraction
        duplicate_policy: STRICT raises on an existing ID, LENIENT skips

    Returns:
        ImportResult with status COMMITTED or one of the SKIPPED_* values

    Raises:
        DuplicateKeyError: Existing ID under the STRICT policy
        UnsupportedFormatError: Metadata cannot be read
        EncodeFailureError: A placeholder cannot be written
        OSError: The raw copy cannot be written

    Example:
        >>> result = import_raw_file(Path("IMG_0001.3FR"), config, store, timestamp=1700000000)
        >>> result.image_id
        'IMG_00013FR1700000000'
    """
    raw_path = Path(raw_path)

    skip_status, reason = RawFileValidator.validate_file(raw_path)
    if skip_status is not None:
        logger.warning("Skipped: {}", reason)
        return ImportResult(source=raw_path, status=skip_status, error=reason)
    logger.debug("{}: {}", raw_path.name, ImportStage.VALIDATED.value)

    base_name = raw_path.stem
    exif_data, device_name, date_time_original, offset = resolve_metadata(raw_path, exif_blob)
    logger.debug("{}: {}", raw_path.name, ImportStage.METADATA_RESOLVED.value)

    if timestamp is None:
        timestamp = int(time.time())
    image_id = CatalogEntryBuilder.make_image_id(base_name, timestamp)

    if store.exists(image_id):
        if duplicate_policy is DuplicatePolicy.STRICT:
            raise DuplicateKeyError(
                image_id, f"Image ID already exists: {image_id} (same file imported with the same timestamp?)"
            )
        logger.warning("Skipped: image ID already exists: {}", image_id)
        return ImportResult(
            source=raw_path,
            status=ImportStatus.SKIPPED_DUPLICATE,
            image_id=image_id,
            error=f"Image ID already exists: {image_id}",
        )

    raw_dst = config.raw_dir / CatalogEntryBuilder.raw_file_name(image_id)
    _copy_replace(raw_path, raw_dst)

    try:
        patch = HeaderPatcher.patch_first(raw_dst)
    except OSError as e:
        logger.warning("Header patch failed for {}: {}", raw_dst.name, e)
    else:
        if patch.patched:
            logger.info("Patched import flag in {} at offset {} (0x40 -> 0x42)", raw_dst.name, patch.offset)

    PlaceholderGenerator.write_thumbnail(config.preview_dir / CatalogEntryBuilder.thumbnail_name(image_id))
    PlaceholderGenerator.write_middle(config.preview_dir / CatalogEntryBuilder.middle_name(image_id))
    logger.debug("{}: {}", raw_path.name, ImportStage.FILES_PLACED.value)

    record = CatalogEntryBuilder.build(
        base_name,
        timestamp,
        exif_data,
        device_name=device_name,
        date_time_original=date_time_original,
        offset=offset,
    )
    logger.debug("{}: {} (adjustment data {} bytes)", raw_path.name, ImportStage.RECORD_BUILT.value,
                 len(record.adjustment_data))

    store.insert(record)
    logger.info("Imported {} -> {}", raw_path.name, image_id)

    return ImportResult(source=raw_path, status=ImportStatus.COMMITTED, image_id=image_id, record=record)


def import_directory(
    directory: Path,
    config: ImporterConfig,
    store: CatalogStore,
    base_timestamp: Optional[int] = None,
    progress_callback: Optional[Callable[[int, int, ImportResult], None]] = None,
) -> BatchSummary:
    """
    Import every .3FR in a directory.

    Files are processed in name order. File i gets timestamp base + i so
    image IDs stay unique even when several imports land in the same second.
    Duplicates are skipped and per-file errors are logged and counted; the
    loop always runs to the end.

    Args:
        directory: Directory to scan (not recursive)
        config: Resolved run configuration
        store: Open catalog store
        base_timestamp: Timestamp for the first file (default: now)
        progress_callback: Optional callback(current, total, result)

    Returns:
        BatchSummary with one result per discovered file

    Raises:
        InputPathError: If `directory` is not a directory
        NoInputFilesError: If it contains no .3FR files
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise InputPathError(f"Batch import needs a directory: {directory}")

    raw_files = FormatDetector.find_raw_files(directory)
    if not raw_files:
        raise NoInputFilesError(f"No .3FR files found in {directory}")

    logger.info("Batch import: directory={} files={}", directory, len(raw_files))

    if base_timestamp is None:
        base_timestamp = int(time.time())

    summary = BatchSummary(directory=directory)
    total = len(raw_files)

    for index, raw_path in enumerate(raw_files):
        try:
            result = import_raw_file(
                raw_path,
                config,
                store,
                timestamp=base_timestamp + index,
                duplicate_policy=DuplicatePolicy.LENIENT,
            )
        except (ImporterError, OSError) as e:
            logger.error("Import failed: {}: {}", raw_path.name, e)
            result = ImportResult(source=raw_path, status=ImportStatus.FAILED, error=str(e))

        summary.results.append(result)
        if progress_callback:
            progress_callback(index + 1, total, result)

    logger.info("Batch import finished: succeeded={} failed/skipped={}", summary.succeeded, summary.failed)
    return summary
