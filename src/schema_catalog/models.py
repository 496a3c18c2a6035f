"""
Core data models for the schema_catalog package.

Defines the immutable metadata snapshot produced by catalog extraction:
databases, their tables, and the columns of each table.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from schema_catalog.types import is_numeric_field


@dataclass(frozen=True)
class ColumnMetadata:
    """Identity and native type of a single column."""
    column_name: str
    type_name: str
    type_code: int

    def __post_init__(self):
        if not self.column_name:
            raise ValueError("column_name must be a non-empty string")

    @property
    def is_numeric(self) -> bool:
        """Whether the column holds numeric values."""
        return is_numeric_field(self.type_code)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "column_name": self.column_name,
            "type_name": self.type_name,
            "type_code": self.type_code,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ColumnMetadata:
        """Create from dictionary."""
        return cls(
            column_name=data["column_name"],
            type_name=data["type_name"],
            type_code=int(data["type_code"]),
        )


@dataclass(frozen=True)
class TableMetadata:
    """Metadata for a database table."""
    table_name: str
    database_name: str
    columns: Tuple[ColumnMetadata, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Columns are always stored as a tuple
        object.__setattr__(self, "columns", tuple(self.columns))

    @property
    def full_name(self) -> str:
        """Return database-qualified table name."""
        return f"{self.database_name}.{self.table_name}"

    @property
    def column_names(self) -> List[str]:
        """Return list of column names."""
        return [c.column_name for c in self.columns]

    def get_column(self, name: str) -> Optional[ColumnMetadata]:
        """Get column by exact name."""
        for col in self.columns:
            if col.column_name == name:
                return col
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "table_name": self.table_name,
            "database_name": self.database_name,
            "columns": [c.to_dict() for c in self.columns],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TableMetadata:
        """Create from dictionary."""
        return cls(
            table_name=data["table_name"],
            database_name=data["database_name"],
            columns=[ColumnMetadata.from_dict(c) for c in data.get("columns", [])],
        )


@dataclass(frozen=True)
class DatabaseMetadata:
    """
    Validated snapshot of one database's catalog.

    This is the artifact handed to schema rendering. Tables that failed
    validation never appear here.
    """
    database_name: str
    tables: Tuple[TableMetadata, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "tables", tuple(self.tables))

    @property
    def table_names(self) -> List[str]:
        """Return list of table names."""
        return [t.table_name for t in self.tables]

    def get_table(self, name: str) -> Optional[TableMetadata]:
        """Get table by exact name."""
        for table in self.tables:
            if table.table_name == name:
                return table
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "database_name": self.database_name,
            "tables": [t.to_dict() for t in self.tables],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DatabaseMetadata:
        """Create from dictionary."""
        return cls(
            database_name=data["database_name"],
            tables=[TableMetadata.from_dict(t) for t in data.get("tables", [])],
        )

    def save(self, path: Path) -> None:
        """Save snapshot to disk as JSON, or YAML for .yaml/.yml paths."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            if path.suffix in (".yaml", ".yml"):
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
            else:
                json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path) -> DatabaseMetadata:
        """Load snapshot from disk."""
        path = Path(path)

        with open(path, "r") as f:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)

        return cls.from_dict(data)


def unique_columns(columns: Iterable[ColumnMetadata]) -> List[ColumnMetadata]:
    """Drop structurally equal duplicates, keeping first occurrences in order."""
    return list(dict.fromkeys(columns))
