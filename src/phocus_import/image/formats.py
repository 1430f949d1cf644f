"""
Raw Format Detection

Recognizes Hasselblad .3FR files by extension.
"""

from pathlib import Path
from typing import List


class FormatDetector:
    """Detect importable raw files"""

    RAW_EXTENSION = ".3fr"

    # Extension used for the copy placed in the host's raw directory
    STORED_EXTENSION = ".3FR"

    @staticmethod
    def is_3fr(file_path: Path) -> bool:
        """
        Check if file has a .3FR extension (case-insensitive).

        Args:
            file_path: Path to raw file

        Returns:
            True if the suffix is .3fr in any letter case
        """
        return file_path.suffix.lower() == FormatDetector.RAW_EXTENSION

    @staticmethod
    def find_raw_files(directory: Path) -> List[Path]:
        """
        List importable raw files in a directory, sorted by name.

        Hidden entries and subdirectories are ignored. Only the directory
        itself is scanned, not its children.

        Args:
            directory: Directory to scan

        Returns:
            Raw file paths in ascending name order
        """
        found = [
            entry for entry in directory.iterdir()
            if not entry.name.startswith(".")
            and entry.is_file()
            and FormatDetector.is_3fr(entry)
        ]
        return sorted(found, key=lambda p: p.name)
