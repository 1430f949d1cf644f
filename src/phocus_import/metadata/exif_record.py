"""
EXIF Record Model

The ten-field metadata blob stored verbatim in a catalog record.

The host application decodes this blob itself, so the key names and their
order are fixed. Records are built and decoded by the host key names only;
the snake_case attribute names are for reading. Serialization is compact
JSON in declaration order, which keeps two encodings of the same record
byte-identical.
"""

from pydantic import BaseModel, ConfigDict, Field


class ExifRecord(BaseModel):
    """
    Normalized metadata for one imported raw file.

    All values are display strings, never numbers:
        shot: Lens model ("" if unknown)
        device: Camera model
        dimensions: "W * H" or ""
        date_time_original: Vendor timestamp "YYYY:MM:DD HH:MM:SS"
        aperture_value: F-stop with at most one fractional digit
        offset_time_original: UTC offset such as "+08:00", often ""
        rating: Always "Optional(N)"
        shutter_speed_value: "2s", "2.5s", "1/200s" or "0s"
        iso: ISO sensitivity or ""
        orientation: "0", "90", "180" or "270"
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    shot: str = Field(alias="Shot")
    device: str = Field(alias="Device")
    dimensions: str = Field(alias="Dimensions")
    date_time_original: str = Field(alias="DateTimeOriginal")
    aperture_value: str = Field(alias="ApertureValue")
    offset_time_original: str = Field(alias="OffsetTimeOriginal")
    rating: str = Field(alias="Rating")
    shutter_speed_value: str = Field(alias="ShutterSpeedValue")
    iso: str = Field(alias="ISO")
    orientation: str = Field(alias="Orientation")

    def to_bytes(self) -> bytes:
        """Encode as compact UTF-8 JSON using the host's key names"""
        return self.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def from_bytes(cls, blob: bytes) -> "ExifRecord":
        """
        Decode a blob produced by to_bytes() or supplied by the user.

        Raises:
            pydantic.ValidationError: If the blob is not a JSON object carrying
                all ten keys with string values
        """
        return cls.model_validate_json(blob)
