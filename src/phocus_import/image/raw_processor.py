"""
RAW Sensor Information

Reads sensor dimensions from .3FR files with rawpy (LibRaw) when it is
installed. Pillow only sees the TIFF container's first directory, which may
describe an embedded preview rather than the sensor image.
"""

from pathlib import Path
from typing import Optional, Tuple

try:
    import rawpy
    RAWPY_AVAILABLE = True
except ImportError:
    RAWPY_AVAILABLE = False


class RawProcessor:
    """Query raw files through LibRaw"""

    @staticmethod
    def is_available() -> bool:
        """
        Check if rawpy is installed and available.

        Returns:
            True if rawpy can be imported
        """
        return RAWPY_AVAILABLE

    @staticmethod
    def get_sensor_size(raw_path: Path) -> Optional[Tuple[int, int]]:
        """
        Read the processed image size without demosaicing.

        Args:
            raw_path: Path to raw file

        Returns:
            (width, height) or None if rawpy is missing or cannot read the file
        """
        if not RAWPY_AVAILABLE:
            return None

        try:
            with rawpy.imread(str(raw_path)) as raw:
                width, height = raw.sizes.width, raw.sizes.height
        except (rawpy.LibRawError, OSError):
            return None

        if width <= 0 or height <= 0:
            return None
        return width, height
