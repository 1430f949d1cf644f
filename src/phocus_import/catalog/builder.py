"""
Catalog Entry Builder

Derives identifiers, file names and date fields for a new catalog record.
Pure data transformation: no file or store access.
"""

from datetime import datetime, timezone
from typing import Optional

from ..models.catalog_record import CatalogRecord

IMAGE_ID_INFIX = "3FR"
RAW_FILE_SUFFIX = ".3FR"
THUMBNAIL_PREFIX = "Thumbnail_"
MIDDLE_PREFIX = "Middle_"
PREVIEW_SUFFIX = ".jpg"

CAMERA_INDEX_UUID_SUFFIX = "f9617ffbebb1cb5b434bf12a4628f081927HASBL"

VENDOR_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"


class CatalogEntryBuilder:
    """Builds CatalogRecord values for imported raw files"""

    @staticmethod
    def make_image_id(base_name: str, timestamp: int) -> str:
        """
        Derive the primary key.

        Example:
            >>> CatalogEntryBuilder.make_image_id("IMG_0001", 1700000000)
            'IMG_00013FR1700000000'
        """
        return f"{base_name}{IMAGE_ID_INFIX}{timestamp}"

    @staticmethod
    def raw_file_name(image_id: str) -> str:
        return f"{image_id}{RAW_FILE_SUFFIX}"

    @staticmethod
    def thumbnail_name(image_id: str) -> str:
        return f"{THUMBNAIL_PREFIX}{image_id}{PREVIEW_SUFFIX}"

    @staticmethod
    def middle_name(image_id: str) -> str:
        return f"{MIDDLE_PREFIX}{image_id}{PREVIEW_SUFFIX}"

    @staticmethod
    def camera_index_uuid(base_name: str) -> str:
        return base_name[:8] + CAMERA_INDEX_UUID_SUFFIX

    @staticmethod
    def parse_date_time_original(value: str) -> Optional[datetime]:
        """
        Parse "YYYY:MM:DD HH:MM:SS" as UTC wall-clock time.

        The separately extracted UTC offset is deliberately not applied:
        the host stores the local wall-clock reading as if it were UTC.

        Returns:
            Aware datetime in UTC, or None if empty or malformed
        """
        if not value:
            return None
        try:
            parsed = datetime.strptime(value, VENDOR_DATETIME_FORMAT)
        except ValueError:
            return None
        return parsed.replace(tzinfo=timezone.utc)

    @staticmethod
    def date_only_desc(value: str) -> str:
        """First 10 characters ("YYYY:MM:DD"), or the whole string if shorter"""
        return value[:10]

    @staticmethod
    def build(
        base_name: str,
        timestamp: int,
        exif_data: bytes,
        device_name: str = "",
        date_time_original: str = "",
        offset: str = "",
        now: Optional[datetime] = None,
    ) -> CatalogRecord:
        """
        Assemble the catalog record for one import.

        Args:
            base_name: Source file name without extension
            timestamp: Unix timestamp used in the image ID
            exif_data: Encoded metadata blob, stored verbatim
            device_name: Camera model; empty becomes null
            date_time_original: Vendor timestamp string
            offset: UTC offset string; empty becomes null
            now: Fallback instant when the vendor timestamp does not parse
                (defaults to the current time)

        Returns:
            A new CatalogRecord
        """
        image_id = CatalogEntryBuilder.make_image_id(base_name, timestamp)

        parsed = CatalogEntryBuilder.parse_date_time_original(date_time_original)
        if parsed is None:
            parsed = now or datetime.now(timezone.utc)

        return CatalogRecord(
            image_id=image_id,
            image_name=base_name,
            thumbnail_jpeg=CatalogEntryBuilder.thumbnail_name(image_id),
            middle_jpeg=CatalogEntryBuilder.middle_name(image_id),
            raw_file=CatalogEntryBuilder.raw_file_name(image_id),
            exif_data=bytes(exif_data),
            date_time_original=parsed,
            date_time_original_str=date_time_original,
            date_time_original_desc=CatalogEntryBuilder.date_only_desc(date_time_original),
            camera_index_uuid=CatalogEntryBuilder.camera_index_uuid(base_name),
            device_name=device_name or None,
            date_time_offset=offset or None,
            adjustment_data=b"",
        )
