"""Data models for phocus-import"""

from .catalog_record import CatalogRecord
from .import_result import BatchSummary, DuplicatePolicy, ImportResult, ImportStage, ImportStatus

__all__ = [
    "CatalogRecord",
    "ImportResult",
    "ImportStage",
    "ImportStatus",
    "BatchSummary",
    "DuplicatePolicy",
]
