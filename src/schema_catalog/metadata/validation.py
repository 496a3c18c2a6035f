"""
Column name and table validation.

Column names must be usable as field names in the generated schema. All
column checks of a table run unconditionally and their failures are
accumulated, so a rejected table is reported with every offending column at
once.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from schema_catalog.metadata.diagnostics import Diagnostics, LoggingDiagnostics
from schema_catalog.models import TableMetadata

logger = logging.getLogger(__name__)

IDENTIFIER_PATTERN = "^[_a-zA-Z][_a-zA-Z0-9]*$"

_IDENTIFIER_RE = re.compile(IDENTIFIER_PATTERN)


@dataclass(frozen=True)
class Validated:
    """
    Outcome of one or more validations.

    Either ``values`` holds every validated name (no errors), or ``errors``
    holds every failure message collected so far.
    """
    values: Tuple[str, ...] = ()
    errors: Tuple[str, ...] = ()

    @classmethod
    def valid(cls, value: str) -> Validated:
        return cls(values=(value,))

    @classmethod
    def invalid(cls, message: str) -> Validated:
        return cls(errors=(message,))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def value(self) -> str:
        """The single validated value of a successful name check."""
        if not self.is_valid:
            raise ValueError("Validation failed: " + "; ".join(self.errors))
        return self.values[0]

    def combine(self, other: Validated) -> Validated:
        """Merge two outcomes; failures from both sides are kept."""
        if self.is_valid and other.is_valid:
            return Validated(values=self.values + other.values)
        return Validated(errors=self.errors + other.errors)


def validate_column_name(column_name: str) -> Validated:
    """
    Check a column name against the identifier pattern.

    Returns:
        Valid result echoing the name, or an invalid result whose message
        names the column and the pattern it failed
    """
    if isinstance(column_name, str) and _IDENTIFIER_RE.fullmatch(column_name):
        return Validated.valid(column_name)
    return Validated.invalid(
        f"The column {column_name} doesn't satisfy the following regex: {IDENTIFIER_PATTERN}"
    )


def validate_column_names(column_names: Iterable[str]) -> Validated:
    """Validate every name and fold the outcomes without short-circuiting."""
    result = Validated()
    for name in column_names:
        result = result.combine(validate_column_name(name))
    return result


class TableValidator:
    """
    Accepts or rejects candidate tables.

    Rejections are reported as error diagnostics identifying
    ``database.table``.
    """

    def __init__(self, diagnostics: Optional[Diagnostics] = None):
        self.diagnostics = diagnostics or LoggingDiagnostics(logger)

    def validate(self, table: TableMetadata) -> bool:
        """
        Decide whether a table may enter the final metadata.

        Args:
            table: Candidate table

        Returns:
            True if the table has at least one column and all column names
            are valid identifiers
        """
        if not table.columns:
            self.diagnostics.error(f"{table.full_name} has an empty column set")
            return False

        result = validate_column_names(table.column_names)
        if result.is_valid:
            return True

        self.diagnostics.error(
            f"{table.full_name}'s column names have the following validation errors: \n "
            + "\n".join(result.errors)
        )
        return False


def validate_table(table: TableMetadata, diagnostics: Optional[Diagnostics] = None) -> bool:
    """Validate a single table with a one-off ``TableValidator``."""
    return TableValidator(diagnostics).validate(table)
