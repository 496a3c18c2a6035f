"""
Tests for the database metadata extractor.

Uses in-memory catalogs served through the cursor protocol.
"""

import sqlite3

import pytest

from schema_catalog.metadata.diagnostics import RecordingDiagnostics
from schema_catalog.metadata.extractor import DatabaseMetadataExtractor, get_database_metadata
from schema_catalog.models import ColumnMetadata, DatabaseMetadata, TableMetadata

USERS_COLUMNS = [("id", 4, "INTEGER"), ("name", 12, "VARCHAR")]


@pytest.fixture
def diagnostics():
    return RecordingDiagnostics()


@pytest.fixture
def extractor(diagnostics):
    return DatabaseMetadataExtractor(diagnostics)


class TestDatabaseSelection:
    """Tests for selecting tables by database name."""

    def test_exact_database_match(self, make_connection, extractor):
        connection = make_connection(
            tables=[
                (None, "db1", "a"),
                (None, "db2", "b"),
                (None, "Db1", "c"),
            ],
            columns={"a": USERS_COLUMNS, "b": USERS_COLUMNS, "c": USERS_COLUMNS},
        )

        metadata = extractor.get_database_metadata(connection, "db1")

        assert metadata.table_names == ["a"]
        assert connection.catalog.column_requests == ["a"]

    def test_no_matching_tables(self, make_connection, extractor, diagnostics):
        connection = make_connection(tables=[(None, "other", "a")], columns={"a": USERS_COLUMNS})

        metadata = extractor.get_database_metadata(connection, "app")

        assert metadata == DatabaseMetadata("app", [])
        assert diagnostics.infos == ["About to get metadata for the database app"]
        assert diagnostics.errors == []

    def test_requests_configured_table_types(self, make_connection, diagnostics):
        connection = make_connection(tables=[], columns={})

        DatabaseMetadataExtractor(diagnostics).get_database_metadata(connection, "app")
        DatabaseMetadataExtractor(diagnostics, table_types=["TABLE", "VIEW"]).get_database_metadata(connection, "app")

        assert connection.catalog.table_type_requests == [["TABLE"], ["TABLE", "VIEW"]]


class TestTableAssembly:
    """Tests for building tables from column listings."""

    def test_end_to_end(self, make_connection, extractor):
        connection = make_connection(
            tables=[(None, "app", "users")],
            columns={"users": USERS_COLUMNS},
        )

        metadata = extractor.get_database_metadata(connection, "app")

        assert metadata == DatabaseMetadata("app", [
            TableMetadata("users", "app", [
                ColumnMetadata("id", "INTEGER", 4),
                ColumnMetadata("name", "VARCHAR", 12),
            ]),
        ])

    def test_duplicate_columns_collapsed(self, make_connection, extractor):
        connection = make_connection(
            tables=[(None, "app", "users")],
            columns={"users": [("id", 4, "INTEGER"), ("id", 4, "INTEGER")]},
        )

        metadata = extractor.get_database_metadata(connection, "app")

        assert metadata.get_table("users").columns == (ColumnMetadata("id", "INTEGER", 4),)

    def test_catalog_order_preserved(self, make_connection, extractor):
        connection = make_connection(
            tables=[(None, "app", "a"), (None, "app", "b"), (None, "app", "c")],
            columns={
                "a": [("z", 4, "INTEGER"), ("y", 4, "INTEGER"), ("x", 4, "INTEGER")],
                "b": USERS_COLUMNS,
                "c": USERS_COLUMNS,
            },
        )

        metadata = extractor.get_database_metadata(connection, "app")

        assert metadata.table_names == ["a", "b", "c"]
        assert metadata.get_table("a").column_names == ["z", "y", "x"]

    def test_type_code_coerced_to_int(self, make_connection, extractor):
        connection = make_connection(
            tables=[(None, "app", "t")],
            columns={"t": [("amount", "3", "DECIMAL")]},
        )

        metadata = extractor.get_database_metadata(connection, "app")

        assert metadata.get_table("t").columns[0].type_code == 3

    def test_cursors_closed(self, make_connection, extractor):
        connection = make_connection(
            tables=[(None, "app", "users")],
            columns={"users": USERS_COLUMNS},
        )

        extractor.get_database_metadata(connection, "app")

        assert len(connection.catalog.cursors) == 2
        assert all(c.closed for c in connection.catalog.cursors)


class TestRejection:
    """Tests for excluding malformed tables."""

    def test_invalid_column_name_excludes_table(self, make_connection, extractor, diagnostics):
        connection = make_connection(
            tables=[(None, "app", "bad-table")],
            columns={"bad-table": [("1id", 4, "INTEGER")]},
        )

        metadata = extractor.get_database_metadata(connection, "app")

        assert metadata == DatabaseMetadata("app", [])
        assert len(diagnostics.errors) == 1
        assert diagnostics.errors[0].startswith("app.bad-table's column names")

    def test_empty_table_excluded(self, make_connection, extractor, diagnostics):
        connection = make_connection(
            tables=[(None, "app", "empty"), (None, "app", "users")],
            columns={"users": USERS_COLUMNS},
        )

        metadata = extractor.get_database_metadata(connection, "app")

        assert metadata.table_names == ["users"]
        assert diagnostics.errors == ["app.empty has an empty column set"]

    def test_all_failures_reported_together(self, make_connection, extractor, diagnostics):
        connection = make_connection(
            tables=[(None, "app", "t")],
            columns={"t": [("1bad", 4, "INTEGER"), ("2worse", 12, "VARCHAR")]},
        )

        extractor.get_database_metadata(connection, "app")

        assert len(diagnostics.errors) == 1
        assert "1bad" in diagnostics.errors[0]
        assert "2worse" in diagnostics.errors[0]

    def test_unnamed_column_excludes_table(self, make_connection, extractor, diagnostics):
        connection = make_connection(
            tables=[(None, "app", "t"), (None, "app", "users")],
            columns={"t": [("", 4, "INTEGER")], "users": USERS_COLUMNS},
        )

        metadata = extractor.get_database_metadata(connection, "app")

        assert metadata.table_names == ["users"]
        assert diagnostics.errors == ["app.t has a column without a name"]

    def test_non_string_column_name_excludes_table(self, make_connection, extractor, diagnostics):
        connection = make_connection(
            tables=[(None, "app", "t"), (None, "app", "users")],
            columns={"t": [(42, 4, "INTEGER")], "users": USERS_COLUMNS},
        )

        metadata = extractor.get_database_metadata(connection, "app")

        assert metadata.table_names == ["users"]
        assert diagnostics.errors == ["app.t has a column without a name"]

    @pytest.mark.parametrize("type_code", [None, "", "GEOMETRY"])
    def test_missing_type_code_excludes_table(self, make_connection, extractor, diagnostics, type_code):
        connection = make_connection(
            tables=[(None, "app", "weird"), (None, "app", "users")],
            columns={"weird": [("geom", type_code, "GEOMETRY")], "users": USERS_COLUMNS},
        )

        metadata = extractor.get_database_metadata(connection, "app")

        assert metadata.table_names == ["users"]
        assert metadata.get_table("users").column_names == ["id", "name"]
        assert diagnostics.errors == ["app.weird has a column without a type code"]

    def test_numeric_string_type_code_accepted(self, make_connection, extractor):
        connection = make_connection(
            tables=[(None, "app", "t")],
            columns={"t": [("id", "4", "INTEGER")]},
        )

        metadata = extractor.get_database_metadata(connection, "app")

        assert metadata.get_table("t").columns == (ColumnMetadata("id", "INTEGER", 4),)


class TestExtractionCalls:
    """Tests for repeated calls and driver failures."""

    def test_idempotent(self, make_connection, extractor):
        connection = make_connection(
            tables=[(None, "app", "users"), (None, "app", "bad")],
            columns={"users": USERS_COLUMNS, "bad": [("no good", 12, "VARCHAR")]},
        )

        first = extractor.get_database_metadata(connection, "app")
        second = extractor.get_database_metadata(connection, "app")

        assert first == second
        assert first is not second

    def test_driver_errors_propagate(self, make_connection, extractor):
        connection = make_connection(tables=[(None, "app", "users")], columns={})

        def broken(table_name):
            raise sqlite3.OperationalError("database is closed")

        connection.catalog.get_columns = broken

        with pytest.raises(sqlite3.OperationalError):
            extractor.get_database_metadata(connection, "app")

    def test_module_level_helper(self, make_connection, diagnostics):
        connection = make_connection(tables=[(None, "app", "users")], columns={"users": USERS_COLUMNS})

        metadata = get_database_metadata(connection, "app", diagnostics)

        assert metadata.table_names == ["users"]
        assert diagnostics.infos == ["About to get metadata for the database app"]
