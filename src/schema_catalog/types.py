"""
Database-native column type codes.

Codes follow the ``java.sql.Types`` numbering, which is what catalog
introspection APIs report in the ``DATA_TYPE`` column of a column listing.
"""

from __future__ import annotations

from enum import IntEnum
from typing import FrozenSet, Optional


class SqlType(IntEnum):
    """Standard SQL type codes."""
    BIT = -7
    TINYINT = -6
    SMALLINT = 5
    INTEGER = 4
    BIGINT = -5
    FLOAT = 6
    REAL = 7
    DOUBLE = 8
    NUMERIC = 2
    DECIMAL = 3
    CHAR = 1
    VARCHAR = 12
    LONGVARCHAR = -1
    DATE = 91
    TIME = 92
    TIMESTAMP = 93
    BINARY = -2
    VARBINARY = -3
    LONGVARBINARY = -4
    NULL = 0
    OTHER = 1111
    BLOB = 2004
    CLOB = 2005
    BOOLEAN = 16
    NCHAR = -15
    NVARCHAR = -9
    LONGNVARCHAR = -16
    NCLOB = 2011
    TIMESTAMP_WITH_TIMEZONE = 2014

    @classmethod
    def from_code(cls, code: int) -> Optional[SqlType]:
        """Map a raw driver code to a member, or None when it is not a standard code."""
        try:
            return cls(code)
        except ValueError:
            return None


NUMERIC_TYPES: FrozenSet[SqlType] = frozenset({
    SqlType.DOUBLE,
    SqlType.FLOAT,
    SqlType.SMALLINT,
    SqlType.INTEGER,
    SqlType.BIGINT,
    SqlType.DECIMAL,
})


def is_numeric_field(type_code: int) -> bool:
    """Return True if the type code renders as a number downstream."""
    return SqlType.from_code(type_code) in NUMERIC_TYPES
