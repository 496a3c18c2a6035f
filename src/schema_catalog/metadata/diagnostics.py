"""
Diagnostic sinks used by validation and extraction.

Validators report through a ``Diagnostics`` object instead of a hard-wired
logger so tests can capture records directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol


class Diagnostics(Protocol):
    """Receives leveled, plain-text diagnostic messages."""

    def info(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingDiagnostics:
    """Forward diagnostics to a standard library logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("schema_catalog")

    def info(self, message: str) -> None:
        self.logger.info(message)

    def error(self, message: str) -> None:
        self.logger.error(message)


@dataclass(frozen=True)
class Diagnostic:
    """A single captured diagnostic."""
    level: str
    message: str


@dataclass
class RecordingDiagnostics:
    """Keep every diagnostic in memory, in emission order."""
    records: List[Diagnostic] = field(default_factory=list)

    def info(self, message: str) -> None:
        self.records.append(Diagnostic("info", message))

    def error(self, message: str) -> None:
        self.records.append(Diagnostic("error", message))

    @property
    def errors(self) -> List[str]:
        return [r.message for r in self.records if r.level == "error"]

    @property
    def infos(self) -> List[str]:
        return [r.message for r in self.records if r.level == "info"]
