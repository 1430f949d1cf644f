"""
Input Validation Module

Checks a raw file path before it enters the import pipeline.
"""

from pathlib import Path
from typing import Optional, Tuple

from ..image.formats import FormatDetector
from ..models.import_result import ImportStatus


class RawFileValidator:
    """Validate raw file paths before import"""

    @staticmethod
    def validate_file(file_path: Path) -> Tuple[Optional[ImportStatus], Optional[str]]:
        """
        Check that the file exists and is a .3FR.

        Args:
            file_path: Path to raw file

        Returns:
            (None, None) if valid, else (skip status, reason)
        """
        if not file_path.is_file():
            return ImportStatus.SKIPPED_NOT_FOUND, f"File not found: {file_path}"

        if not FormatDetector.is_3fr(file_path) or not file_path.stem:
            return ImportStatus.SKIPPED_WRONG_EXTENSION, f"Not a .3FR file: {file_path}"

        return None, None

    @staticmethod
    def is_valid(file_path: Path) -> bool:
        status, _ = RawFileValidator.validate_file(file_path)
        return status is None
