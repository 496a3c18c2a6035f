"""Shared fixtures: an in-memory catalog served through the cursor protocol."""

import pytest

from schema_catalog.metadata.catalog import COLUMN_LISTING_COLUMNS, TABLE_LISTING_COLUMNS
from schema_catalog.metadata.cursor import IterableCursor


class FakeCatalog:
    """
    Catalog listings built from plain tuples.

    tables: (TABLE_CAT, TABLE_SCHEM, TABLE_NAME) per table
    columns: table name -> [(COLUMN_NAME, DATA_TYPE, TYPE_NAME), ...]
    """

    def __init__(self, tables, columns):
        self.tables = tables
        self.columns = columns
        self.cursors = []
        self.table_type_requests = []
        self.column_requests = []

    def _cursor(self, layout, rows):
        cursor = IterableCursor(layout, rows)
        self.cursors.append(cursor)
        return cursor

    def get_tables(self, table_types):
        self.table_type_requests.append(list(table_types))
        rows = [(cat, schem, name, "TABLE", None) for cat, schem, name in self.tables]
        return self._cursor(TABLE_LISTING_COLUMNS, rows)

    def get_columns(self, table_name):
        self.column_requests.append(table_name)
        rows = [
            (None, None, table_name, name, code, type_name, None, 1)
            for name, code, type_name in self.columns.get(table_name, [])
        ]
        return self._cursor(COLUMN_LISTING_COLUMNS, rows)


class FakeConnection:
    """Connection whose catalog is a FakeCatalog."""

    def __init__(self, catalog):
        self.catalog = catalog

    def get_metadata(self):
        return self.catalog


@pytest.fixture
def make_connection():
    """Factory for connections over an in-memory catalog."""
    def _make(tables, columns):
        return FakeConnection(FakeCatalog(tables, columns))
    return _make
