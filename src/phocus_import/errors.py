"""
Error Taxonomy

Exceptions raised by the import pipeline.

Skips (missing input, wrong extension, lenient duplicates) and an absent
header marker are not errors: they are reported through ImportResult and
PatchResult instead.
"""

from typing import Optional


class ImporterError(Exception):
    """Base class for all phocus-import errors"""


class UnsupportedFormatError(ImporterError):
    """The metadata reader cannot open the raw file at all"""


class EncodeFailureError(ImporterError):
    """A placeholder JPEG could not be constructed or written"""


class DuplicateKeyError(ImporterError):
    """A catalog record with the same image ID already exists"""

    def __init__(self, image_id: str, message: Optional[str] = None):
        self.image_id = image_id
        super().__init__(message or f"Image ID already exists: {image_id}")


class StoreUnavailableError(ImporterError):
    """The catalog store is missing or has an unexpected schema version"""


class StoreAccessError(ImporterError):
    """A read or write on an open catalog store failed (locked, I/O error, damaged schema)"""


class InputPathError(ImporterError):
    """A required input path is missing or of the wrong kind"""


class NoInputFilesError(ImporterError):
    """A batch directory contains no importable raw files"""


class ContainerNotFoundError(ImporterError):
    """The host application's container could not be located"""
