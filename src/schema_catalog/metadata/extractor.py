"""
Database metadata extractor.

Walks a connection's catalog introspection facility, assembles one
``TableMetadata`` per table of the requested database and keeps only the
tables that pass validation.
"""

from __future__ import annotations

import logging
from contextlib import closing
from typing import List, Optional, Sequence

from schema_catalog.metadata.catalog import (
    COLUMN_NAME_FIELD,
    COLUMN_TYPE_CODE_FIELD,
    COLUMN_TYPE_NAME_FIELD,
    TABLE_DATABASE_FIELD,
    TABLE_NAME_FIELD,
    CatalogConnection,
    CatalogMetadata,
)
from schema_catalog.metadata.cursor import Row, materialize
from schema_catalog.metadata.diagnostics import Diagnostics, LoggingDiagnostics
from schema_catalog.metadata.validation import TableValidator
from schema_catalog.models import (
    ColumnMetadata,
    DatabaseMetadata,
    TableMetadata,
    unique_columns,
)

logger = logging.getLogger(__name__)

DEFAULT_TABLE_TYPES = ("TABLE",)


def _field(row: Row, position: int):
    return row[position][1]


def _type_code(value) -> Optional[int]:
    """Integer type code of a catalog cell, or None if it has none."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class DatabaseMetadataExtractor:
    """
    Builds validated ``DatabaseMetadata`` snapshots.

    Each call runs fresh catalog queries; nothing is cached between calls.
    Malformed tables are dropped and reported through ``diagnostics``;
    driver errors propagate to the caller.
    """

    def __init__(
        self,
        diagnostics: Optional[Diagnostics] = None,
        table_types: Sequence[str] = DEFAULT_TABLE_TYPES,
    ):
        self.diagnostics = diagnostics or LoggingDiagnostics(logger)
        self.table_types = list(table_types)
        self.validator = TableValidator(self.diagnostics)

    def get_database_metadata(
        self,
        connection: CatalogConnection,
        database_name: str,
    ) -> DatabaseMetadata:
        """
        Extract the validated metadata of one database.

        The table listing is not filtered by the driver; tables are selected
        by exact, case-sensitive comparison of their reported database name.

        Args:
            connection: Open connection, used exclusively for the duration of the call
            database_name: Database to extract

        Returns:
            DatabaseMetadata holding only the tables that passed validation
        """
        self.diagnostics.info(f"About to get metadata for the database {database_name}")
        metadata = connection.get_metadata()

        candidates = []
        for table_name in self._get_table_names(metadata, database_name):
            table = self._get_table(metadata, database_name, table_name)
            if table is not None:
                candidates.append(table)

        tables = [t for t in candidates if self.validator.validate(t)]

        logger.debug(
            f"Accepted {len(tables)} of {len(candidates)} tables in {database_name}"
        )
        return DatabaseMetadata(database_name=database_name, tables=tables)

    def _get_table_names(self, metadata: CatalogMetadata, database_name: str) -> List[str]:
        """List names of the tables reported for the database, in catalog order."""
        with closing(metadata.get_tables(self.table_types)) as cursor:
            rows = materialize(cursor)

        return [
            _field(row, TABLE_NAME_FIELD)
            for row in reversed(rows)
            if _field(row, TABLE_DATABASE_FIELD) == database_name
        ]

    def _get_table(
        self,
        metadata: CatalogMetadata,
        database_name: str,
        table_name: str,
    ) -> Optional[TableMetadata]:
        """
        Build the candidate table.

        Returns None, with an error diagnostic, if the catalog reports a
        column without a usable name or type code.
        """
        with closing(metadata.get_columns(table_name)) as cursor:
            rows = materialize(cursor)

        columns = []
        for row in reversed(rows):
            column_name = _field(row, COLUMN_NAME_FIELD)
            if not column_name or not isinstance(column_name, str):
                self.diagnostics.error(
                    f"{database_name}.{table_name} has a column without a name"
                )
                return None

            type_code = _type_code(_field(row, COLUMN_TYPE_CODE_FIELD))
            if type_code is None:
                self.diagnostics.error(
                    f"{database_name}.{table_name} has a column without a type code"
                )
                return None

            columns.append(ColumnMetadata(
                column_name=column_name,
                type_name=_field(row, COLUMN_TYPE_NAME_FIELD),
                type_code=type_code,
            ))

        return TableMetadata(
            table_name=table_name,
            database_name=database_name,
            columns=unique_columns(columns),
        )


def get_database_metadata(
    connection: CatalogConnection,
    database_name: str,
    diagnostics: Optional[Diagnostics] = None,
) -> DatabaseMetadata:
    """Extract database metadata with a default extractor."""
    return DatabaseMetadataExtractor(diagnostics).get_database_metadata(connection, database_name)
