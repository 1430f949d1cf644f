"""
Raw Metadata Extraction Module

Reads embedded metadata from .3FR files and normalizes it into an ExifRecord.

Extraction runs in two steps:
1. read_properties() opens the file with Pillow and collects one optional
   value per source tag (RawProperties). This is the only step touching disk.
2. normalize() applies one fallback chain per output field. It is pure and
   never fails; missing values become "" or the documented default.
"""

import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from loguru import logger
from PIL import Image, UnidentifiedImageError

from ..errors import UnsupportedFormatError
from ..image.raw_processor import RawProcessor
from .exif_record import ExifRecord

# IFD0 tags
TAG_MODEL = 272
TAG_ORIENTATION = 274
TAG_XMP = 700
TAG_RATING = 18246
TAG_EXIF_IFD = 0x8769

# EXIF sub-IFD tags
TAG_EXPOSURE_TIME = 33434
TAG_F_NUMBER = 33437
TAG_ISO = 34855
TAG_DATETIME_ORIGINAL = 36867
TAG_OFFSET_TIME_ORIGINAL = 36881
TAG_SHUTTER_SPEED_VALUE = 37377
TAG_APERTURE_VALUE = 37378
TAG_LENS_MODEL = 42036

ORIENTATION_DEGREES = {1: "0", 3: "180", 6: "90", 8: "270"}

# Loose matches inside an XMP packet: attribute form (xmp:Rating="3")
# and element form (<xmp:Rating>3</xmp:Rating>)
_XMP_RATINGS = (
    re.compile(rb"xmp:Rating\s*(?:=\s*[\"']|>)\s*(\d+)"),
    re.compile(rb"[:<\s]Rating\s*(?:=\s*[\"']|>)\s*(\d+)"),
)
_XMP_LENS = re.compile(rb"[:<\s]Lens(?:Model)?\s*(?:=\s*[\"']|>)\s*([^\"'<]+?)\s*[\"'<]")


@dataclass(frozen=True)
class RawProperties:
    """
    Raw metadata values as found in the file, before normalization.

    Every field is optional; absence is normal for raw files.
    """
    pixel_width: Optional[int] = None
    pixel_height: Optional[int] = None
    orientation: Optional[int] = None
    model: Optional[str] = None
    date_time_original: Optional[str] = None
    offset_time_original: Optional[str] = None
    f_number: Optional[float] = None
    aperture_value: Optional[float] = None
    exposure_time: Optional[float] = None
    shutter_speed_value: Optional[float] = None
    iso: Optional[int] = None
    lens_model: Optional[str] = None
    aux_lens_model: Optional[str] = None
    rating: Optional[int] = None
    xmp_rating: Optional[int] = None


@dataclass(frozen=True)
class ExtractedMetadata:
    """
    Extraction result plus the values the catalog builder needs directly.

    Attributes:
        record: Normalized ten-field record
        device_name: Camera model ("" if absent)
        date_time_original: Vendor timestamp string ("" if absent)
        offset: UTC offset string ("" if absent)
    """
    record: ExifRecord
    device_name: str
    date_time_original: str
    offset: str


def round_half_up(value: float, digits: int = 1) -> float:
    """Round positive values with halves going up (2.25 -> 2.3)"""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def format_decimal(value: float) -> str:
    """Round to one decimal and drop a trailing ".0" (4.0 -> "4", 2.8 -> "2.8")"""
    rounded = round_half_up(value, 1)
    if rounded == int(rounded):
        return str(int(rounded))
    return str(rounded)


def format_exposure(seconds: float) -> str:
    """
    Render an exposure duration the way the host displays it.

    Examples:
        >>> format_exposure(2.0)
        '2s'
        >>> format_exposure(0.005)
        '1/200s'
    """
    if not math.isfinite(seconds):
        return "0s"
    if seconds >= 1.0:
        return f"{format_decimal(seconds)}s"
    if seconds > 0:
        denominator = 1.0 / seconds
        if not math.isfinite(denominator):
            return "0s"
        return f"1/{int(round_half_up(denominator, 0))}s"
    return "0s"


def orientation_to_degrees(orientation: Optional[int]) -> str:
    """Map an EXIF orientation code to clockwise degrees; unknown codes map to "0"."""
    if orientation is None:
        return "0"
    return ORIENTATION_DEGREES.get(orientation, "0")


def format_rating(rating: Optional[int]) -> str:
    return f"Optional({rating if rating is not None else 0})"


def _as_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, tuple):
        # Old-style rational (numerator, denominator)
        if len(value) != 2 or not value[1]:
            return None
        value = value[0] / value[1]
    try:
        result = float(value)
    except (TypeError, ValueError, ZeroDivisionError):
        return None
    return None if math.isnan(result) else result


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, (tuple, list)):
        if not value:
            return None
        value = value[0]
    if value is None:
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError, ZeroDivisionError):
        return None


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    return str(value).rstrip("\x00")


def _xmp_match(pattern: "re.Pattern[bytes]", xmp: Optional[bytes]) -> Optional[str]:
    if not xmp:
        return None
    match = pattern.search(xmp)
    if match is None:
        return None
    return match.group(1).decode("utf-8", errors="ignore").strip()


def xmp_rating(xmp: Optional[bytes]) -> Optional[int]:
    """Star rating from an XMP packet, preferring xmp:Rating over other Rating keys"""
    for pattern in _XMP_RATINGS:
        value = _xmp_match(pattern, xmp)
        if value:
            return int(value)
    return None


def xmp_lens_model(xmp: Optional[bytes]) -> Optional[str]:
    """Lens name from an XMP packet (aux:Lens or any LensModel key)"""
    return _xmp_match(_XMP_LENS, xmp) or None


class RawMetadataExtractor:
    """Extracts and normalizes metadata from .3FR raw files"""

    @staticmethod
    def extract(raw_path: Path) -> ExtractedMetadata:
        """
        Read a raw file and build its ExifRecord.

        Args:
            raw_path: Path to .3FR file

        Returns:
            ExtractedMetadata with the record and convenience values

        Raises:
            UnsupportedFormatError: If the file cannot be opened as an image
        """
        props = RawMetadataExtractor.read_properties(raw_path)
        metadata = RawMetadataExtractor.normalize(props)
        logger.debug("Metadata for {}: {}", raw_path.name, metadata.record.to_bytes().decode("utf-8"))
        return metadata

    @staticmethod
    def read_properties(raw_path: Path) -> RawProperties:
        """
        Collect raw tag values from the file.

        Raises:
            UnsupportedFormatError: If Pillow cannot identify the file
        """
        try:
            img = Image.open(raw_path)
        except UnidentifiedImageError as e:
            raise UnsupportedFormatError(f"Cannot read metadata from {raw_path}: {e}") from e

        with img:
            width, height = img.size
            exif = img.getexif()
            try:
                exif_ifd: Mapping[int, Any] = exif.get_ifd(TAG_EXIF_IFD)
            except (KeyError, AttributeError):
                exif_ifd = {}
            xmp = img.info.get("xmp") or exif.get(TAG_XMP)

        # Sub-IFD values fill in what IFD0 lacks
        tags = dict(exif_ifd)
        tags.update(exif)

        sensor_size = RawProcessor.get_sensor_size(raw_path)
        if sensor_size is not None:
            width, height = sensor_size

        if isinstance(xmp, str):
            xmp = xmp.encode("utf-8")

        model = _as_str(exif.get(TAG_MODEL))
        lens_model = _as_str(tags.get(TAG_LENS_MODEL))

        return RawProperties(
            pixel_width=width,
            pixel_height=height,
            orientation=_as_int(exif.get(TAG_ORIENTATION)),
            model=model.strip() if model else None,
            date_time_original=_as_str(tags.get(TAG_DATETIME_ORIGINAL)),
            offset_time_original=_as_str(tags.get(TAG_OFFSET_TIME_ORIGINAL)),
            f_number=_as_float(tags.get(TAG_F_NUMBER)),
            aperture_value=_as_float(tags.get(TAG_APERTURE_VALUE)),
            exposure_time=_as_float(tags.get(TAG_EXPOSURE_TIME)),
            shutter_speed_value=_as_float(tags.get(TAG_SHUTTER_SPEED_VALUE)),
            iso=_as_int(tags.get(TAG_ISO)),
            lens_model=lens_model.strip() if lens_model else None,
            aux_lens_model=xmp_lens_model(xmp),
            rating=_as_int(exif.get(TAG_RATING)),
            xmp_rating=xmp_rating(xmp),
        )

    @staticmethod
    def normalize(props: RawProperties) -> ExtractedMetadata:
        """Apply the per-field fallback chains to collected properties."""
        if props.pixel_width is not None and props.pixel_height is not None:
            dimensions = f"{props.pixel_width} * {props.pixel_height}"
        else:
            dimensions = ""

        aperture = props.f_number if props.f_number is not None else props.aperture_value
        aperture_str = format_decimal(aperture) if aperture is not None else ""

        seconds = props.exposure_time
        if seconds is None and props.shutter_speed_value is not None:
            # APEX Tv -> seconds
            try:
                seconds = 2.0 ** -props.shutter_speed_value
            except OverflowError:
                seconds = None
        shutter_str = format_exposure(seconds) if seconds is not None else "0s"

        shot = props.lens_model or props.aux_lens_model or ""
        rating = props.rating if props.rating is not None else props.xmp_rating

        device = props.model or ""
        date_time_original = props.date_time_original or ""
        offset = props.offset_time_original or ""

        record = ExifRecord(
            Shot=shot,
            Device=device,
            Dimensions=dimensions,
            DateTimeOriginal=date_time_original,
            ApertureValue=aperture_str,
            OffsetTimeOriginal=offset,
            Rating=format_rating(rating),
            ShutterSpeedValue=shutter_str,
            ISO=str(props.iso) if props.iso is not None else "",
            Orientation=orientation_to_degrees(props.orientation),
        )
        return ExtractedMetadata(
            record=record,
            device_name=device,
            date_time_original=date_time_original,
            offset=offset,
        )
