"""
SQLite catalog adapter.

Lists tables of every attached database (``main``, ``temp`` and anything
added with ``ATTACH``) and reports the attached database name in
``TABLE_SCHEM``. Column type codes are derived from declared types following
SQLite's type affinity rules.
"""

from __future__ import annotations

import logging
import re
import sqlite3
from pathlib import Path
from typing import Any, Iterator, List, Optional, Sequence, Tuple, Union

from schema_catalog.metadata.catalog import (
    COLUMN_LISTING_COLUMNS,
    COLUMN_NO_NULLS,
    COLUMN_NULLABLE,
    TABLE_LISTING_COLUMNS,
)
from schema_catalog.metadata.cursor import IterableCursor
from schema_catalog.types import SqlType

logger = logging.getLogger(__name__)


# Declared type name -> type code
SQLITE_TYPE_MAP = {
    "INTEGER": SqlType.INTEGER,
    "INT": SqlType.INTEGER,
    "MEDIUMINT": SqlType.INTEGER,
    "TINYINT": SqlType.TINYINT,
    "SMALLINT": SqlType.SMALLINT,
    "BIGINT": SqlType.BIGINT,
    "BOOLEAN": SqlType.BOOLEAN,
    "REAL": SqlType.REAL,
    "FLOAT": SqlType.FLOAT,
    "DOUBLE": SqlType.DOUBLE,
    "DOUBLE PRECISION": SqlType.DOUBLE,
    "DECIMAL": SqlType.DECIMAL,
    "NUMERIC": SqlType.NUMERIC,
    "CHAR": SqlType.CHAR,
    "CHARACTER": SqlType.CHAR,
    "NCHAR": SqlType.NCHAR,
    "VARCHAR": SqlType.VARCHAR,
    "NVARCHAR": SqlType.NVARCHAR,
    "TEXT": SqlType.VARCHAR,
    "CLOB": SqlType.CLOB,
    "BLOB": SqlType.BLOB,
    "DATE": SqlType.DATE,
    "TIME": SqlType.TIME,
    "DATETIME": SqlType.TIMESTAMP,
    "TIMESTAMP": SqlType.TIMESTAMP,
}

_TYPE_RE = re.compile(r"^\s*([^(]*?)\s*(?:\(\s*(\d+)[^)]*\))?\s*$")

_TABLE_TYPES = {"table": "TABLE", "view": "VIEW"}


def _quote(identifier: str) -> str:
    return '"' + identifier.replace('"', '""') + '"'


def map_declared_type(declared: Optional[str]) -> Tuple[str, SqlType, Optional[int]]:
    """
    Map a declared column type to (type name, type code, column size).

    Unknown names fall back to SQLite's affinity rules.
    """
    match = _TYPE_RE.match(declared or "")
    base = match.group(1).upper() if match else (declared or "").upper()
    size = int(match.group(2)) if match and match.group(2) else None

    if base in SQLITE_TYPE_MAP:
        return base, SQLITE_TYPE_MAP[base], size
    if "INT" in base:
        return base, SqlType.INTEGER, size
    if any(t in base for t in ("CHAR", "CLOB", "TEXT")):
        return base, SqlType.VARCHAR, size
    if not base or "BLOB" in base:
        return base or "BLOB", SqlType.BLOB, size
    if any(t in base for t in ("REAL", "FLOA", "DOUB")):
        return base, SqlType.DOUBLE, size
    return base, SqlType.NUMERIC, size


class SqliteCatalogMetadata:
    """Catalog listings of one SQLite connection."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def _database_names(self) -> List[str]:
        return [row[1] for row in self._conn.execute("PRAGMA database_list")]

    def _iter_tables(self, table_types: Sequence[str]) -> Iterator[Tuple[Any, ...]]:
        wanted = {t.upper() for t in table_types}
        for database in self._database_names():
            rows = self._conn.execute(
                f"SELECT name, type FROM {_quote(database)}.sqlite_master "
                "WHERE type IN ('table', 'view') AND name NOT LIKE 'sqlite_%' "
                "ORDER BY name"
            ).fetchall()
            for name, kind in rows:
                table_type = _TABLE_TYPES[kind]
                if table_type in wanted:
                    yield (None, database, name, table_type, None)

    def _iter_columns(self, table_name: str) -> Iterator[Tuple[Any, ...]]:
        for database in self._database_names():
            rows = self._conn.execute(
                f"PRAGMA {_quote(database)}.table_info({_quote(table_name)})"
            ).fetchall()
            for _cid, name, declared, notnull, _default, _pk in rows:
                type_name, type_code, size = map_declared_type(declared)
                yield (
                    None,
                    database,
                    table_name,
                    name,
                    int(type_code),
                    type_name,
                    size,
                    COLUMN_NO_NULLS if notnull else COLUMN_NULLABLE,
                )

    def get_tables(self, table_types: Sequence[str]) -> IterableCursor:
        return IterableCursor(TABLE_LISTING_COLUMNS, self._iter_tables(table_types))

    def get_columns(self, table_name: str) -> IterableCursor:
        return IterableCursor(COLUMN_LISTING_COLUMNS, self._iter_columns(table_name))


class SqliteCatalogConnection:
    """
    Catalog connection over a SQLite database.

    Accepts a database path (or ``":memory:"``) or an existing
    ``sqlite3.Connection``. Connections passed in are not closed by
    ``disconnect``.
    """

    def __init__(self, database: Union[str, Path, sqlite3.Connection]):
        if isinstance(database, sqlite3.Connection):
            self._conn: Optional[sqlite3.Connection] = database
            self._owns_conn = False
            self.database = None
        else:
            self._conn = None
            self._owns_conn = True
            self.database = str(database)

    def connect(self) -> None:
        """Open the database file."""
        if self._conn is None:
            self._conn = sqlite3.connect(self.database)
            logger.info(f"Opened SQLite database {self.database}")

    def disconnect(self) -> None:
        """Close the connection if this object opened it."""
        if self._conn is not None and self._owns_conn:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self.connect()
        return self._conn

    def attach(self, path: Union[str, Path], name: str) -> None:
        """Attach another database file under ``name``."""
        self.connection.execute(f"ATTACH DATABASE ? AS {_quote(name)}", (str(path),))

    def get_metadata(self) -> SqliteCatalogMetadata:
        return SqliteCatalogMetadata(self.connection)
