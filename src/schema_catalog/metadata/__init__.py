"""
Catalog introspection and validation.

Provides the extractor that turns a connection's catalog into validated
metadata, plus catalog adapters for SQLite and Oracle.
"""

from schema_catalog.metadata.catalog import CatalogConnection, CatalogMetadata
from schema_catalog.metadata.cursor import (
    DbApiCursor,
    IterableCursor,
    ResultCursor,
    materialize,
)
from schema_catalog.metadata.diagnostics import (
    Diagnostic,
    Diagnostics,
    LoggingDiagnostics,
    RecordingDiagnostics,
)
from schema_catalog.metadata.extractor import DatabaseMetadataExtractor, get_database_metadata
from schema_catalog.metadata.oracle import OracleCatalogConnection
from schema_catalog.metadata.sqlite import SqliteCatalogConnection
from schema_catalog.metadata.validation import (
    IDENTIFIER_PATTERN,
    TableValidator,
    Validated,
    validate_column_name,
    validate_column_names,
    validate_table,
)

__all__ = [
    "CatalogConnection",
    "CatalogMetadata",
    "DbApiCursor",
    "IterableCursor",
    "ResultCursor",
    "materialize",
    "Diagnostic",
    "Diagnostics",
    "LoggingDiagnostics",
    "RecordingDiagnostics",
    "DatabaseMetadataExtractor",
    "get_database_metadata",
    "OracleCatalogConnection",
    "SqliteCatalogConnection",
    "IDENTIFIER_PATTERN",
    "TableValidator",
    "Validated",
    "validate_column_name",
    "validate_column_names",
    "validate_table",
]
