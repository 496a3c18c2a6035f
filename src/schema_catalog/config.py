"""
Extraction configuration.

Settings come from an optional YAML file and are overridden by command-line
options. Example file:

    source: sqlite
    database: main
    sqlite_path: ./app.db
    table_types: [TABLE]
    output: ./app_metadata.json
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

SOURCES = ("sqlite", "oracle")


class ConfigError(ValueError):
    """Raised for missing or inconsistent configuration."""


@dataclass
class ExtractionConfig:
    """Configuration for an extraction run."""
    source: str = "sqlite"
    database: Optional[str] = None
    sqlite_path: Optional[Path] = None
    oracle_conn: Optional[str] = None
    table_types: List[str] = field(default_factory=lambda: ["TABLE"])
    output: Optional[Path] = None

    def __post_init__(self):
        # YAML reads names such as 2024 as numbers
        if self.database is not None and not isinstance(self.database, str):
            self.database = str(self.database)
        if isinstance(self.sqlite_path, str):
            self.sqlite_path = Path(self.sqlite_path)
        if isinstance(self.output, str):
            self.output = Path(self.output)
        if isinstance(self.table_types, str):
            self.table_types = [t.strip() for t in self.table_types.split(",") if t.strip()]

    def merge(self, **overrides: Any) -> ExtractionConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def validate(self) -> None:
        """Check that the settings are complete for the chosen source."""
        if self.source not in SOURCES:
            raise ConfigError(f"Unknown source '{self.source}', expected one of {', '.join(SOURCES)}")
        if not self.database:
            raise ConfigError("A database name is required")
        if self.source == "sqlite" and self.sqlite_path is None:
            raise ConfigError("sqlite source requires sqlite_path")
        if self.source == "sqlite" and not self.sqlite_path.exists():
            raise ConfigError(f"SQLite database not found: {self.sqlite_path}")
        if self.source == "oracle" and not self.oracle_conn:
            raise ConfigError("oracle source requires oracle_conn")
        if not self.table_types:
            raise ConfigError("At least one table type is required")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ExtractionConfig:
        """Create from dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)


def load_config(path: Optional[Path]) -> ExtractionConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: YAML file, or None for defaults

    Returns:
        ExtractionConfig (not yet validated)
    """
    if path is None:
        return ExtractionConfig()

    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file must contain a mapping: {path}")

    logger.info(f"Loaded configuration from {path}")
    return ExtractionConfig.from_dict(data)
