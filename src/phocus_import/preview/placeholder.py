"""
Placeholder Preview Generation

Synthesizes solid-color JPEGs that stand in for the thumbnail and middle
previews the host application would normally render from the raw data.
"""

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Tuple

from loguru import logger
from PIL import Image

from ..errors import EncodeFailureError


@dataclass(frozen=True)
class PlaceholderPreview:
    """
    A placeholder JPEG written to disk.

    Attributes:
        path: Where the JPEG was written
        width: Width in pixels
        height: Height in pixels
        size_bytes: Encoded file size
    """
    path: Path
    width: int
    height: int
    size_bytes: int


class PlaceholderGenerator:
    """Generate opaque single-color JPEG placeholders"""

    THUMBNAIL_SIZE = (400, 300)
    MIDDLE_SIZE = (1378, 1033)
    DEFAULT_QUALITY = 0.92
    DEFAULT_COLOR = (0, 0, 0)

    @staticmethod
    def render_placeholder(
        width: int,
        height: int,
        quality: float = DEFAULT_QUALITY,
        color: Tuple[int, int, int] = DEFAULT_COLOR,
    ) -> bytes:
        """
        Encode a solid-color image as JPEG bytes.

        The raster is built as 8-bit RGBA with alpha fixed at 255, then
        flattened to RGB since JPEG has no alpha channel.

        Args:
            width: Width in pixels, must be > 0
            height: Height in pixels, must be > 0
            quality: Lossy quality in [0, 1]; out-of-range values are clamped
            color: RGB fill color

        Returns:
            JPEG bytes

        Raises:
            ValueError: If width or height is not positive
            EncodeFailureError: If Pillow cannot build or encode the image
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Placeholder size must be positive, got {width}x{height}")

        quality = max(0.0, min(1.0, quality))
        jpeg_quality = int(round(quality * 100))

        try:
            img = Image.new("RGBA", (width, height), (*color, 255))
            buffer = BytesIO()
            img.convert("RGB").save(buffer, format="JPEG", quality=jpeg_quality)
        except (OSError, ValueError, MemoryError) as e:
            raise EncodeFailureError(f"Cannot encode {width}x{height} placeholder: {e}") from e

        return buffer.getvalue()

    @staticmethod
    def write_placeholder(
        output_path: Path,
        width: int,
        height: int,
        quality: float = DEFAULT_QUALITY,
        color: Tuple[int, int, int] = DEFAULT_COLOR,
    ) -> PlaceholderPreview:
        """
        Render a placeholder and write it to `output_path`, replacing any
        existing file.

        Raises:
            EncodeFailureError: If encoding or writing fails
        """
        data = PlaceholderGenerator.render_placeholder(width, height, quality=quality, color=color)
        try:
            output_path.write_bytes(data)
        except OSError as e:
            raise EncodeFailureError(f"Cannot write placeholder {output_path}: {e}") from e

        logger.debug("Wrote {}x{} placeholder {} ({} bytes)", width, height, output_path.name, len(data))
        return PlaceholderPreview(path=output_path, width=width, height=height, size_bytes=len(data))

    @staticmethod
    def write_thumbnail(output_path: Path) -> PlaceholderPreview:
        """Write the 400x300 thumbnail placeholder"""
        width, height = PlaceholderGenerator.THUMBNAIL_SIZE
        return PlaceholderGenerator.write_placeholder(output_path, width, height)

    @staticmethod
    def write_middle(output_path: Path) -> PlaceholderPreview:
        """Write the 1378x1033 middle preview placeholder"""
        width, height = PlaceholderGenerator.MIDDLE_SIZE
        return PlaceholderGenerator.write_placeholder(output_path, width, height)
