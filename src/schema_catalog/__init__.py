"""
Schema Catalog - Validated database metadata for schema generation

Reads a relational database's catalog (tables, columns, column types) and
produces an immutable metadata snapshot suitable for generating a typed API
schema.

Features:
- Driver-agnostic catalog traversal through a forward-only cursor protocol
- Identifier validation with accumulated, per-table error reporting
- Silent exclusion of malformed tables, with full diagnostics
- SQLite and Oracle catalog adapters
"""

__version__ = "0.1.0"

from schema_catalog.models import (
    ColumnMetadata,
    DatabaseMetadata,
    TableMetadata,
)
from schema_catalog.types import NUMERIC_TYPES, SqlType, is_numeric_field

from schema_catalog.metadata import (
    DatabaseMetadataExtractor,
    get_database_metadata,
    validate_column_name,
    validate_table,
)

__all__ = [
    # Core models
    "ColumnMetadata",
    "TableMetadata",
    "DatabaseMetadata",
    # Type classification
    "SqlType",
    "NUMERIC_TYPES",
    "is_numeric_field",
    # Extraction
    "DatabaseMetadataExtractor",
    "get_database_metadata",
    "validate_column_name",
    "validate_table",
]
