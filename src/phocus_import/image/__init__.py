"""Raw file handling module"""

from .formats import FormatDetector
from .header_patcher import HeaderPatcher, PatchResult
from .raw_processor import RawProcessor

__all__ = ["FormatDetector", "HeaderPatcher", "PatchResult", "RawProcessor"]
