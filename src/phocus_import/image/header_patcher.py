"""
Raw Header Patching

Rewrites one flag in the TIFF header of a copied .3FR so the host
application treats the file as imported. Only the first occurrence of the
marker inside the first 4 KB is changed; identical byte runs deeper in the
file belong to unrelated structures.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

# IFD entry: tag 0x0012, type LONG, count 1, value 0x40 -> 0x42
IMPORT_FLAG_SEARCH = bytes([0x12, 0x00, 0x04, 0x00, 0x01, 0x00, 0x00, 0x00, 0x40, 0x00, 0x00, 0x00])
IMPORT_FLAG_REPLACE = bytes([0x12, 0x00, 0x04, 0x00, 0x01, 0x00, 0x00, 0x00, 0x42, 0x00, 0x00, 0x00])

MAX_SCAN_BYTES = 4096


@dataclass(frozen=True)
class PatchResult:
    """
    Outcome of a header patch.

    Attributes:
        patched: True if a match was found and rewritten
        offset: Byte offset of the rewritten match, None if not patched
    """
    patched: bool
    offset: Optional[int] = None


class HeaderPatcher:
    """In-place first-match byte replacement within a file prefix"""

    @staticmethod
    def patch_first(
        file_path: Path,
        search: bytes = IMPORT_FLAG_SEARCH,
        replace: bytes = IMPORT_FLAG_REPLACE,
        max_scan_bytes: int = MAX_SCAN_BYTES,
    ) -> PatchResult:
        """
        Replace the first occurrence of `search` within the file's prefix.

        Patterns of different or zero length are a no-op reported as not
        patched. A missing match leaves the file untouched.

        Args:
            file_path: File to patch in place
            search: Byte pattern to find
            replace: Same-length replacement
            max_scan_bytes: Size of the prefix that is scanned

        Returns:
            PatchResult with the match offset when patched

        Raises:
            OSError: If the file cannot be opened for update
        """
        if not search or len(search) != len(replace):
            logger.info("Header patch skipped: search/replace patterns must be non-empty and equal length")
            return PatchResult(patched=False)

        with open(file_path, "r+b") as fh:
            head = bytearray(fh.read(max_scan_bytes))
            offset = head.find(search)
            if offset < 0:
                logger.info("Header marker not found in first {} bytes of {}", max_scan_bytes, file_path.name)
                return PatchResult(patched=False)

            head[offset:offset + len(replace)] = replace
            fh.seek(0)
            fh.write(head)

        return PatchResult(patched=True, offset=offset)
