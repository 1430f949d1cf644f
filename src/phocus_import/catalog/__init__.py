"""Catalog record building and storage"""

from .builder import CatalogEntryBuilder
from .store import SCHEMA_VERSION, CatalogStore

__all__ = ["CatalogEntryBuilder", "CatalogStore", "SCHEMA_VERSION"]
