"""Metadata extraction module"""

from .exif_record import ExifRecord
from .raw_extractor import (
    ExtractedMetadata,
    RawMetadataExtractor,
    RawProperties,
    format_exposure,
    format_rating,
    orientation_to_degrees,
    xmp_lens_model,
    xmp_rating,
)

__all__ = [
    "ExifRecord",
    "ExtractedMetadata",
    "RawMetadataExtractor",
    "RawProperties",
    "format_exposure",
    "format_rating",
    "orientation_to_degrees",
    "xmp_lens_model",
    "xmp_rating",
]
