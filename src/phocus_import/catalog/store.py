"""
Catalog Store

Embedded single-writer store for catalog records, keyed by image ID.

The store is a SQLite file whose `user_version` pragma carries the schema
version the host application expects. Opening refuses a missing file or a
different version rather than migrating it.
"""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from ..errors import DuplicateKeyError, StoreAccessError, StoreUnavailableError
from ..models.catalog_record import CatalogRecord

SCHEMA_VERSION = 13
TABLE_NAME = "PSLocalPhotoIndexEntity"
COLUMN_PREFIX = "hb_"

_DATETIME_FIELDS = {"date_time_original", "date_time_digitized", "date_time_original_legacy"}
_BLOB_FIELDS = {"exif_data", "adjustment_data"}
_BOOL_FIELDS = {"is_adjusted", "is_like", "is_ai_denoised"}
_INT_FIELDS = {"media_type", "ai_denoise_type", "storage_type", "rating"}


def _column(field_name: str) -> str:
    return COLUMN_PREFIX + field_name


def _column_type(field_name: str) -> str:
    if field_name in _BLOB_FIELDS:
        return "BLOB"
    if field_name in _BOOL_FIELDS or field_name in _INT_FIELDS:
        return "INTEGER"
    return "TEXT"


def _create_table_sql() -> str:
    columns = []
    for name in CatalogRecord.field_names():
        definition = f"{_column(name)} {_column_type(name)}"
        if name == "image_id":
            definition += " PRIMARY KEY NOT NULL"
        columns.append(definition)
    return f"CREATE TABLE IF NOT EXISTS {TABLE_NAME} ({', '.join(columns)})"


def _to_row(record: CatalogRecord) -> Dict[str, Any]:
    row = {}
    for name, value in record.to_dict().items():
        if name in _DATETIME_FIELDS and value is not None:
            value = value.isoformat()
        elif name in _BOOL_FIELDS:
            value = int(value)
        row[_column(name)] = value
    return row


def _from_row(row: sqlite3.Row) -> CatalogRecord:
    values = {}
    for name in CatalogRecord.field_names():
        value = row[_column(name)]
        if name in _DATETIME_FIELDS and value is not None:
            value = datetime.fromisoformat(value)
        elif name in _BOOL_FIELDS:
            value = bool(value)
        elif name in _BLOB_FIELDS and value is not None:
            value = bytes(value)
        values[name] = value
    return CatalogRecord(**values)


class CatalogStore:
    """
    Handle on an open catalog store.

    Opened once per run and used by one writer. Supports use as a context
    manager:

        >>> with CatalogStore.open(path) as store:
        ...     store.exists("IMG_00013FR1700000000")
    """

    def __init__(self, conn: sqlite3.Connection, path: Path):
        self._conn = conn
        self.path = path

    @classmethod
    def open(cls, path: Path, schema_version: int = SCHEMA_VERSION, timeout: float = 5.0) -> "CatalogStore":
        """
        Open an existing store.

        `timeout` is how long a statement waits on a lock held by another
        process before failing.

        Raises:
            StoreUnavailableError: If the file is missing, unreadable, or
                stamped with a different schema version
        """
        path = Path(path)
        if not path.is_file():
            raise StoreUnavailableError(f"Catalog store not found: {path}")

        try:
            conn = sqlite3.connect(str(path), timeout=timeout)
            conn.row_factory = sqlite3.Row
            version = conn.execute("PRAGMA user_version").fetchone()[0]
        except sqlite3.DatabaseError as e:
            raise StoreUnavailableError(f"Cannot open catalog store {path}: {e}") from e

        if version != schema_version:
            conn.close()
            raise StoreUnavailableError(
                f"Catalog store {path} has schema version {version}, expected {schema_version}"
            )

        logger.debug("Opened catalog store {} (schema version {})", path, version)
        return cls(conn, path)

    @classmethod
    def initialize(cls, path: Path, schema_version: int = SCHEMA_VERSION) -> "CatalogStore":
        """
        Create the record table in a new or empty store and stamp its version.

        Returns:
            The opened store
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(path))
        try:
            with conn:
                conn.execute(_create_table_sql())
                conn.execute(f"PRAGMA user_version = {int(schema_version)}")
        finally:
            conn.close()
        return cls.open(path, schema_version=schema_version)

    def _query_one(self, sql: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        try:
            return self._conn.execute(sql, params).fetchone()
        except sqlite3.Error as e:
            raise StoreAccessError(f"Catalog store {self.path} read failed: {e}") from e

    def exists(self, image_id: str) -> bool:
        """
        Point lookup by primary key.

        Raises:
            StoreAccessError: If the store cannot be read
        """
        row = self._query_one(
            f"SELECT 1 FROM {TABLE_NAME} WHERE {_column('image_id')} = ?", (image_id,)
        )
        return row is not None

    def get(self, image_id: str) -> Optional[CatalogRecord]:
        row = self._query_one(
            f"SELECT * FROM {TABLE_NAME} WHERE {_column('image_id')} = ?", (image_id,)
        )
        return _from_row(row) if row is not None else None

    def count(self) -> int:
        return self._query_one(f"SELECT COUNT(*) FROM {TABLE_NAME}")[0]

    def insert(self, record: CatalogRecord) -> None:
        """
        Add one record inside a single transaction.

        Raises:
            DuplicateKeyError: If the image ID is already present
            StoreAccessError: If the write fails for any other reason
        """
        row = _to_row(record)
        columns = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)
        try:
            with self._conn:
                self._conn.execute(
                    f"INSERT INTO {TABLE_NAME} ({columns}) VALUES ({placeholders})",
                    tuple(row.values()),
                )
        except sqlite3.IntegrityError as e:
            raise DuplicateKeyError(record.image_id) from e
        except sqlite3.Error as e:
            raise StoreAccessError(f"Catalog store {self.path} write failed for {record.image_id}: {e}") from e

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "CatalogStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
