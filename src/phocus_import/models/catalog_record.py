"""
Catalog Record Model

One row of the host application's photo index. Field names follow the
host's `hb_` columns without the prefix.

Only fields required for a working imported entry carry values; the rest
keep their null/default values on purpose.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CatalogRecord:
    """
    Immutable catalog entry for an imported raw file.

    Identity:
        image_id: base name + "3FR" + unix timestamp (primary key)

    File references (names only, resolved by the host):
        thumbnail_jpeg, middle_jpeg, raw_file

    Metadata:
        exif_data: Encoded ExifRecord, stored verbatim
        date_time_original: Vendor timestamp read as UTC wall clock
        date_time_offset: Extracted UTC offset, kept separate from the instant
    """
    image_id: str
    image_name: str
    thumbnail_jpeg: str
    middle_jpeg: str
    raw_file: str
    exif_data: bytes
    date_time_original: datetime
    date_time_original_str: str
    date_time_original_desc: str
    camera_index_uuid: str

    device_name: Optional[str] = None
    date_time_offset: Optional[str] = None
    media_type: int = 0

    # Always an explicit empty payload, never null
    adjustment_data: bytes = b""

    is_adjusted: bool = False
    is_like: bool = False
    is_ai_denoised: bool = False
    ai_denoise_type: int = 0
    color_mark: Optional[str] = "0"
    storage_type: int = 1
    rating: int = 0

    full_jpeg: Optional[str] = None
    heif_file: Optional[str] = None
    shot: Optional[str] = None
    date_time_digitized_str: Optional[str] = None
    date_time_digitized: Optional[datetime] = None
    rely_raw_file: Optional[str] = None
    local_identify: Optional[str] = None
    camera_serial_number: Optional[str] = None
    date_time_original_legacy: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Field values keyed by field name, in declaration order"""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def field_names(cls) -> tuple:
        return tuple(f.name for f in fields(cls))
