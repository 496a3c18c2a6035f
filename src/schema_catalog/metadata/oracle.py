"""
Oracle catalog adapter using oracledb.

Serves table and column listings from the Oracle data dictionary views,
reporting the owning schema in ``TABLE_SCHEM``:
- ALL_TABLES / ALL_TAB_COMMENTS
- ALL_TAB_COLUMNS
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, NamedTuple, Optional, Sequence, Tuple

from schema_catalog.metadata.catalog import (
    COLUMN_LISTING_COLUMNS,
    COLUMN_NO_NULLS,
    COLUMN_NULLABLE,
    TABLE_LISTING_COLUMNS,
)
from schema_catalog.metadata.cursor import DbApiCursor, IterableCursor
from schema_catalog.types import SqlType

logger = logging.getLogger(__name__)

DEFAULT_PORT = 1521

TABLES_QUERY = """
    SELECT
        NULL AS table_cat,
        t.owner AS table_schem,
        t.table_name,
        'TABLE' AS table_type,
        c.comments AS remarks
    FROM all_tables t
    LEFT JOIN all_tab_comments c
        ON t.owner = c.owner AND t.table_name = c.table_name
    ORDER BY t.owner, t.table_name
"""


# Oracle type mapping, as reported by the Oracle JDBC driver
ORACLE_TYPE_MAP = {
    "NUMBER": SqlType.DECIMAL,
    "INTEGER": SqlType.DECIMAL,
    "FLOAT": SqlType.FLOAT,
    "BINARY_FLOAT": SqlType.REAL,
    "BINARY_DOUBLE": SqlType.DOUBLE,
    "VARCHAR2": SqlType.VARCHAR,
    "NVARCHAR2": SqlType.NVARCHAR,
    "CHAR": SqlType.CHAR,
    "NCHAR": SqlType.NCHAR,
    "CLOB": SqlType.CLOB,
    "NCLOB": SqlType.NCLOB,
    "DATE": SqlType.TIMESTAMP,  # Oracle DATE includes time
    "TIMESTAMP": SqlType.TIMESTAMP,
    "TIMESTAMP WITH TIME ZONE": SqlType.TIMESTAMP_WITH_TIMEZONE,
    "TIMESTAMP WITH LOCAL TIME ZONE": SqlType.TIMESTAMP,
    "RAW": SqlType.VARBINARY,
    "BLOB": SqlType.BLOB,
    "LONG": SqlType.LONGVARCHAR,
    "LONG RAW": SqlType.LONGVARBINARY,
}


def map_oracle_type(
    data_type: str,
    precision: Optional[int] = None,
    scale: Optional[int] = None,
) -> Tuple[str, SqlType]:
    """
    Map an ALL_TAB_COLUMNS data type to (type name, type code).

    NUMBER columns with scale 0 are narrowed to INTEGER or BIGINT.
    """
    # TIMESTAMP(6) WITH TIME ZONE -> TIMESTAMP WITH TIME ZONE
    type_name = " ".join(
        part.split("(")[0] for part in data_type.upper().split()
    )
    code = ORACLE_TYPE_MAP.get(type_name, SqlType.OTHER)

    if type_name == "NUMBER" and scale == 0 and precision is not None:
        if precision <= 9:
            code = SqlType.INTEGER
        else:
            code = SqlType.BIGINT

    return type_name, code


class OracleLogin(NamedTuple):
    """Credentials and address parsed from a connection string."""
    user: str
    password: str
    host: Optional[str] = None
    port: int = DEFAULT_PORT
    service: str = ""
    alias: str = ""


def parse_connection_string(connection_string: str) -> OracleLogin:
    """
    Split ``user/pwd@host:port/service`` into its parts.

    An address without a colon is kept whole as a TNS alias or easy-connect
    string and handed to the driver unchanged. The port defaults to 1521.
    """
    user_pwd, _, address = connection_string.partition("@")
    user, _, password = user_pwd.partition("/")

    if ":" not in address:
        return OracleLogin(user, password, alias=address)

    host_port, _, service = address.partition("/")
    host, _, port = host_port.partition(":")
    try:
        port_number = int(port) if port else DEFAULT_PORT
    except ValueError:
        raise ValueError(f"Invalid port in Oracle connection string: {port!r}") from None
    return OracleLogin(user, password, host=host, port=port_number, service=service)


class OracleCatalogMetadata:
    """Catalog listings of one Oracle connection."""

    def __init__(self, conn: Any):
        self._conn = conn

    def _iter_columns(self, table_name: str) -> Iterator[Tuple[Any, ...]]:
        cursor = self._conn.cursor()
        try:
            cursor.execute("""
                SELECT
                    owner,
                    column_name,
                    data_type,
                    nullable,
                    data_length,
                    data_precision,
                    data_scale
                FROM all_tab_columns
                WHERE table_name = :table_name
                ORDER BY owner, column_id
            """, table_name=table_name)

            for row in cursor:
                owner, col_name, data_type, nullable, data_length, precision, scale = row
                type_name, type_code = map_oracle_type(data_type, precision, scale)
                yield (
                    None,
                    owner,
                    table_name,
                    col_name,
                    int(type_code),
                    type_name,
                    precision if precision is not None else data_length,
                    COLUMN_NULLABLE if nullable == "Y" else COLUMN_NO_NULLS,
                )
        finally:
            cursor.close()

    def get_tables(self, table_types: Sequence[str]) -> IterableCursor:
        if "TABLE" not in {t.upper() for t in table_types}:
            return IterableCursor(TABLE_LISTING_COLUMNS, [])

        # Already in listing layout, so the driver cursor is served as is
        cursor = self._conn.cursor()
        try:
            cursor.execute(TABLES_QUERY)
        except Exception:
            cursor.close()
            raise
        return DbApiCursor(cursor)

    def get_columns(self, table_name: str) -> IterableCursor:
        return IterableCursor(COLUMN_LISTING_COLUMNS, self._iter_columns(table_name))


class OracleCatalogConnection:
    """
    Catalog connection over an Oracle database.

    Oracle has no catalog level above schemas, so the schema owner is the
    database name to extract.
    """

    def __init__(self, connection_string: Optional[str] = None, connection: Optional[Any] = None):
        """
        Initialize with a connection string or an open oracledb connection.

        Args:
            connection_string: Oracle connection string (user/pwd@host:port/service)
            connection: Existing connection; left open by ``disconnect``
        """
        if connection_string is None and connection is None:
            raise ValueError("Either connection_string or connection is required")
        self.connection_string = connection_string
        self._conn = connection
        self._owns_conn = connection is None

    def connect(self) -> None:
        """Establish database connection."""
        if self._conn is not None:
            return

        import oracledb

        login = parse_connection_string(self.connection_string)
        if login.host is not None:
            dsn = oracledb.makedsn(login.host, login.port, service_name=login.service)
        else:
            dsn = login.alias

        self._conn = oracledb.connect(user=login.user, password=login.password, dsn=dsn)
        logger.info(f"Connected to Oracle database as {login.user}")

    def disconnect(self) -> None:
        """Close database connection."""
        if self._conn is not None and self._owns_conn:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()

    def get_metadata(self) -> OracleCatalogMetadata:
        if self._conn is None:
            self.connect()
        return OracleCatalogMetadata(self._conn)
