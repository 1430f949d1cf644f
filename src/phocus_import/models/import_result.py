"""
Import Result Model

Represents the outcome of importing a single raw file, and of a batch.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .catalog_record import CatalogRecord


class ImportStage(Enum):
    """Progress of one file through the import pipeline"""
    VALIDATED = "validated"
    METADATA_RESOLVED = "metadata_resolved"
    FILES_PLACED = "files_placed"
    RECORD_BUILT = "record_built"
    COMMITTED = "committed"


class ImportStatus(Enum):
    """Terminal state of one import"""
    COMMITTED = "committed"
    SKIPPED_NOT_FOUND = "skipped_not_found"
    SKIPPED_WRONG_EXTENSION = "skipped_wrong_extension"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    FAILED = "failed"


@dataclass
class ImportResult:
    """
    Result from importing a single raw file.

    Fatal errors in single-file mode are raised, not returned; FAILED only
    appears in results produced by the batch coordinator.
    """
    source: Path
    status: ImportStatus
    image_id: Optional[str] = None
    record: Optional[CatalogRecord] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status is ImportStatus.COMMITTED

    @property
    def skipped(self) -> bool:
        return self.status in (
            ImportStatus.SKIPPED_NOT_FOUND,
            ImportStatus.SKIPPED_WRONG_EXTENSION,
            ImportStatus.SKIPPED_DUPLICATE,
        )

    @property
    def is_duplicate(self) -> bool:
        return self.status is ImportStatus.SKIPPED_DUPLICATE


@dataclass
class BatchSummary:
    """Tally of a directory import"""
    directory: Path
    results: List[ImportResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        """Failed and skipped files together"""
        return self.total - self.succeeded


class DuplicatePolicy(Enum):
    """What to do when the derived image ID is already in the store"""
    STRICT = "strict"    # raise DuplicateKeyError
    LENIENT = "lenient"  # skip the file and continue
