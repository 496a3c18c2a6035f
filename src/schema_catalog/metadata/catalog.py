"""
Catalog introspection interface.

Connections expose their catalog through ``CatalogMetadata``, whose listings
use the JDBC ``getTables``/``getColumns`` positional layout. Adapters for
specific drivers build their result cursors from the layouts below.
"""

from __future__ import annotations

from typing import List, Protocol, Sequence, Tuple

from schema_catalog.metadata.cursor import ResultCursor

TABLE_LISTING_COLUMNS: List[Tuple[str, str]] = [
    ("TABLE_CAT", "VARCHAR"),
    ("TABLE_SCHEM", "VARCHAR"),
    ("TABLE_NAME", "VARCHAR"),
    ("TABLE_TYPE", "VARCHAR"),
    ("REMARKS", "VARCHAR"),
]

COLUMN_LISTING_COLUMNS: List[Tuple[str, str]] = [
    ("TABLE_CAT", "VARCHAR"),
    ("TABLE_SCHEM", "VARCHAR"),
    ("TABLE_NAME", "VARCHAR"),
    ("COLUMN_NAME", "VARCHAR"),
    ("DATA_TYPE", "INTEGER"),
    ("TYPE_NAME", "VARCHAR"),
    ("COLUMN_SIZE", "INTEGER"),
    ("NULLABLE", "INTEGER"),
]

# 0-based positions within a materialized table listing row.
# Drivers report the database a table lives in through TABLE_SCHEM.
TABLE_DATABASE_FIELD = 1
TABLE_NAME_FIELD = 2

# 0-based positions within a materialized column listing row
COLUMN_NAME_FIELD = 3
COLUMN_TYPE_CODE_FIELD = 4
COLUMN_TYPE_NAME_FIELD = 5

# JDBC NULLABLE values
COLUMN_NO_NULLS = 0
COLUMN_NULLABLE = 1


class CatalogMetadata(Protocol):
    """Catalog introspection facility of a connection."""

    def get_tables(self, table_types: Sequence[str]) -> ResultCursor:
        """List tables of the given kinds across every catalog and schema."""
        ...

    def get_columns(self, table_name: str) -> ResultCursor:
        """List columns of every table with this name, in any schema."""
        ...


class CatalogConnection(Protocol):
    """A live connection able to describe its own catalog."""

    def get_metadata(self) -> CatalogMetadata: ...
