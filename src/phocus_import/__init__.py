"""
phocus-import - Import Hasselblad .3FR raw files into Phocus 2

This library provides:
- Metadata extraction from .3FR files (normalized EXIF record)
- Placeholder preview generation (400x300 thumbnail, 1378x1033 middle)
- Import-flag patching of the copied raw file header
- Catalog record building and a single-writer catalog store
- Single-file and batch import

Example:
    >>> from pathlib import Path
    >>> from phocus_import import CatalogStore, import_raw_file, load_config
    >>>
    >>> config = load_config()
    >>> with CatalogStore.open(config.store_path) as store:
    ...     config.ensure_dirs()
    ...     result = import_raw_file(Path("B0001234.3FR"), config, store)
    ...     print(result.image_id)
"""

from .version import __version__

# Errors
from .errors import (
    ContainerNotFoundError,
    DuplicateKeyError,
    EncodeFailureError,
    ImporterError,
    InputPathError,
    NoInputFilesError,
    StoreAccessError,
    StoreUnavailableError,
    UnsupportedFormatError,
)

# Metadata extraction
from .metadata import ExifRecord, ExtractedMetadata, RawMetadataExtractor, format_exposure

# Raw file handling
from .image import FormatDetector, HeaderPatcher, PatchResult

# Placeholders
from .preview import PlaceholderGenerator, PlaceholderPreview

# Models
from .models import BatchSummary, CatalogRecord, DuplicatePolicy, ImportResult, ImportStatus

# Catalog
from .catalog import CatalogEntryBuilder, CatalogStore

# Configuration
from .config import ImporterConfig, find_container_root, load_config

# High-level API
from .api import import_directory, import_raw_file

__all__ = [
    # Version
    "__version__",
    # Errors
    "ImporterError",
    "UnsupportedFormatError",
    "EncodeFailureError",
    "DuplicateKeyError",
    "StoreUnavailableError",
    "StoreAccessError",
    "InputPathError",
    "NoInputFilesError",
    "ContainerNotFoundError",
    # Metadata
    "ExifRecord",
    "ExtractedMetadata",
    "RawMetadataExtractor",
    "format_exposure",
    # Raw files
    "FormatDetector",
    "HeaderPatcher",
    "PatchResult",
    # Placeholders
    "PlaceholderGenerator",
    "PlaceholderPreview",
    # Models
    "CatalogRecord",
    "ImportResult",
    "ImportStatus",
    "BatchSummary",
    "DuplicatePolicy",
    # Catalog
    "CatalogEntryBuilder",
    "CatalogStore",
    # Configuration
    "ImporterConfig",
    "load_config",
    "find_container_root",
    # High-level API
    "import_raw_file",
    "import_directory",
]
