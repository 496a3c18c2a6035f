"""
Forward-only result cursors and the materializer that drains them.

Catalog listings are consumed through ``ResultCursor``, a small protocol
shaped after JDBC result sets: ``next()`` advances and reports whether a row
is available, values and descriptors are addressed by 1-based position.
``DbApiCursor`` and ``IterableCursor`` adapt DB-API cursors and plain
iterables to it.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Iterable, Iterator, List, Optional, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)

# (column label, value, column type name)
Cell = Tuple[str, Any, str]
Row = Tuple[Cell, ...]


class CursorMetadata(Protocol):
    """Column descriptor of a result cursor."""

    def column_count(self) -> int: ...

    def column_label(self, index: int) -> str: ...

    def column_type_name(self, index: int) -> str: ...


class ResultCursor(Protocol):
    """Forward-only, single-pass cursor over result rows."""

    @property
    def metadata(self) -> CursorMetadata: ...

    def next(self) -> bool: ...

    def get_object(self, index: int) -> Any: ...

    def close(self) -> None: ...


class ColumnDescriptor:
    """Fixed list of (label, type name) pairs."""

    def __init__(self, columns: Sequence[Tuple[str, str]]):
        self._columns = list(columns)

    def column_count(self) -> int:
        return len(self._columns)

    def column_label(self, index: int) -> str:
        return self._columns[index - 1][0]

    def column_type_name(self, index: int) -> str:
        return self._columns[index - 1][1]


class IterableCursor:
    """
    Serve rows from any iterable through the cursor protocol.

    The iterable is consumed lazily, one row per ``next()`` call.
    """

    def __init__(self, columns: Sequence[Tuple[str, str]], rows: Iterable[Sequence[Any]]):
        self._metadata = ColumnDescriptor(columns)
        self._rows: Iterator[Sequence[Any]] = iter(rows)
        self._current: Optional[Sequence[Any]] = None
        self._closed = False

    @property
    def metadata(self) -> ColumnDescriptor:
        return self._metadata

    @property
    def closed(self) -> bool:
        return self._closed

    def next(self) -> bool:
        if self._closed:
            raise RuntimeError("Cursor is closed")
        self._current = next(self._rows, None)
        return self._current is not None

    def get_object(self, index: int) -> Any:
        if self._current is None:
            raise RuntimeError("Cursor is not positioned on a row")
        return self._current[index - 1]

    def close(self) -> None:
        self._closed = True
        self._current = None


class DbApiCursor(IterableCursor):
    """
    Adapt a DB-API 2.0 cursor that has already executed a query.

    Labels come from ``cursor.description``. Type names use the
    driver's type object name when it has one. Suits catalog queries
    whose select list already follows the listing layout, such as the
    Oracle table listing.
    """

    def __init__(self, cursor: Any):
        columns = [
            (desc[0], _type_name(desc[1]))
            for desc in (cursor.description or [])
        ]
        super().__init__(columns, iter(cursor.fetchone, None))
        self._cursor = cursor

    def close(self) -> None:
        super().close()
        self._cursor.close()


def _type_name(type_code: Any) -> str:
    if type_code is None:
        return ""
    return str(getattr(type_code, "name", type_code))


def materialize(cursor: ResultCursor) -> List[Row]:
    """
    Drain a cursor into a list of rows.

    Column count, labels and type names are read once from
    ``cursor.metadata``; only values are read per row. Each row is
    prepended as it is fetched, so the returned list is in REVERSE retrieval
    order. Callers that care about catalog order must reverse it themselves.

    The cursor is advanced until exhausted but not closed.

    Args:
        cursor: Cursor positioned before its first row

    Returns:
        Rows of (column label, value, column type name) triples
    """
    metadata = cursor.metadata
    column_count = metadata.column_count()
    labels = [
        (metadata.column_label(i), metadata.column_type_name(i))
        for i in range(1, column_count + 1)
    ]

    rows: deque = deque()
    while cursor.next():
        rows.appendleft(tuple(
            (label, cursor.get_object(i), type_name)
            for i, (label, type_name) in enumerate(labels, start=1)
        ))

    logger.debug(f"Materialized {len(rows)} rows with {column_count} columns")
    return list(rows)
