"""
Shared fixtures for phocus-import tests

Raw inputs are synthesized with Pillow: a small JPEG carrying EXIF tags,
saved under a .3FR name. Pillow identifies files by content, so the
extractor reads it the same way it reads a TIFF-based .3FR.
"""

from pathlib import Path
from typing import Optional

import pytest
from PIL import Image
from PIL.TiffImagePlugin import IFDRational

from phocus_import.catalog.store import CatalogStore
from phocus_import.config import ImporterConfig
from phocus_import.image.header_patcher import IMPORT_FLAG_SEARCH

FIXTURE_SIZE = (64, 48)


def build_exif(
    model: Optional[str] = "X2D 100C",
    orientation: Optional[int] = 1,
    date_time_original: Optional[str] = "2025:12:07 13:55:50",
    offset: Optional[str] = "+08:00",
    f_number: Optional[IFDRational] = IFDRational(40, 10),
    exposure_time: Optional[IFDRational] = IFDRational(1, 200),
    iso: Optional[int] = 100,
    lens_model: Optional[str] = "XCD 2,5/55V",
    rating: Optional[int] = None,
) -> Image.Exif:
    """Build an EXIF block with IFD0 and EXIF sub-IFD tags"""
    exif = Image.Exif()
    if model is not None:
        exif[272] = model
    if orientation is not None:
        exif[274] = orientation
    if rating is not None:
        exif[18246] = rating

    sub_ifd = {}
    if date_time_original is not None:
        sub_ifd[36867] = date_time_original
    if offset is not None:
        sub_ifd[36881] = offset
    if f_number is not None:
        sub_ifd[33437] = f_number
    if exposure_time is not None:
        sub_ifd[33434] = exposure_time
    if iso is not None:
        sub_ifd[34855] = iso
    if lens_model is not None:
        sub_ifd[42036] = lens_model
    if sub_ifd:
        exif[0x8769] = sub_ifd
    return exif


def write_raw(path: Path, exif: Optional[Image.Exif] = None, with_marker: bool = True) -> Path:
    """
    Write a synthetic raw file.

    With `with_marker`, the import-flag pattern is embedded in a JPEG
    comment so it lands inside the first 4 KB.
    """
    img = Image.new("RGB", FIXTURE_SIZE, (90, 90, 90))
    kwargs = {}
    if exif is not None:
        kwargs["exif"] = exif
    if with_marker:
        kwargs["comment"] = b"hdr:" + IMPORT_FLAG_SEARCH
    img.save(path, format="JPEG", quality=90, **kwargs)
    return path


@pytest.fixture
def make_raw(tmp_path):
    """Factory writing synthetic .3FR files into tmp_path/input"""
    input_dir = tmp_path / "input"
    input_dir.mkdir()

    def _make(name: str = "IMG_0001.3FR", exif: Optional[Image.Exif] = None, with_marker: bool = True) -> Path:
        return write_raw(input_dir / name, exif if exif is not None else build_exif(), with_marker=with_marker)

    return _make


@pytest.fixture
def config(tmp_path) -> ImporterConfig:
    """Config rooted in a temporary container with its directories created"""
    cfg = ImporterConfig.for_container(tmp_path / "container")
    cfg.ensure_dirs()
    return cfg


@pytest.fixture
def store(config):
    """Fresh catalog store at the config's store path"""
    catalog = CatalogStore.initialize(config.store_path)
    yield catalog
    catalog.close()
