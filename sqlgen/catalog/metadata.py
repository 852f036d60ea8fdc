"""Catalog metadata queries backing the script generators."""

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import inspect, text
from sqlalchemy.engine import Inspector
from sqlalchemy.exc import CompileError, SQLAlchemyError

from sqlgen.catalog.engine import create_database_engine, sanitize_connection_string
from sqlgen.errors import CatalogConnectionError, MetadataQueryError
from sqlgen.models import ColumnDescriptor, ForeignKeyEdge, PrimaryKeyInfo, TableSummary

logger = logging.getLogger(__name__)

# Internal tables created by SQL Server diagram support and SQLite itself
SYSTEM_TABLES = frozenset({"sysdiagrams", "sqlite_sequence", "sqlite_stat1", "sqlite_stat4"})

# Type used for columns the catalog reports without a declared type
UNTYPED_COLUMN_TYPE = "sql_variant"


@contextmanager
def _catalog_query(action: str, table: str | None = None) -> Iterator[None]:
    """Translate SQLAlchemy failures into MetadataQueryError."""
    try:
        yield
    except SQLAlchemyError as e:
        target = f" for table '{table}'" if table else ""
        raise MetadataQueryError(f"Failed to {action}{target}: {e}", table=table) from e


class CatalogMetadata:
    """Read-only view over the catalog of one open database connection.

    Args:
        inspector: SQLAlchemy inspector bound to an open connection
        schema: Database schema name (None = the dialect's default schema)
        exclude_tables: Extra table names to hide besides the system tables
    """

    def __init__(self, inspector: Inspector, schema: str | None = None, exclude_tables: Iterable[str] = ()) -> None:
        self._inspector = inspector
        self.schema = schema
        self._excluded = SYSTEM_TABLES | frozenset(exclude_tables)
        self._edges: list[ForeignKeyEdge] | None = None

    @property
    def dialect_name(self) -> str:
        return self._inspector.dialect.name

    def list_base_tables(self) -> list[str]:
        """List user base tables, excluding views and internal system tables."""
        with _catalog_query("list tables"):
            table_names = self._inspector.get_table_names(schema=self.schema)
        return [name for name in table_names if name not in self._excluded]

    def primary_key_of(self, table: str) -> PrimaryKeyInfo | None:
        """Return the primary key column of a table, or None when it has no primary key.

        For composite keys only the first constrained column is used.
        """
        with _catalog_query("read primary key", table):
            pk_constraint = self._inspector.get_pk_constraint(table, schema=self.schema)

        pk_columns = pk_constraint.get("constrained_columns") or []
        if not pk_columns:
            return None
        if len(pk_columns) > 1:
            logger.debug(f"Table '{table}' has a composite primary key, using '{pk_columns[0]}'")

        column = pk_columns[0]
        return PrimaryKeyInfo(column=column, is_auto_increment=self.is_identity(table, column))

    def is_identity(self, table: str, column: str) -> bool:
        """Check whether the database generates a column's value on insert.

        Args:
            table: Table name
            column: Column name

        Returns:
            True for identity/auto-increment columns and SQLite rowid aliases
        """
        column_info = next((col for col in self._reflect_columns(table) if col["name"] == column), None)
        if column_info is None:
            return False

        if column_info.get("identity") or column_info.get("autoincrement") is True:
            return True

        if self.dialect_name == "sqlite":
            return self._is_sqlite_rowid_alias(table, column)

        return False

    def columns_of(self, table: str) -> list[ColumnDescriptor]:
        """Return the columns of a table in declaration order."""
        return [
            ColumnDescriptor(name=col["name"], declared_type=self._render_type(col["type"]))
            for col in self._reflect_columns(table)
        ]

    def foreign_keys_of_schema(self) -> list[ForeignKeyEdge]:
        """Return every foreign key edge in the schema.

        Edges are ordered by owning table, then by constraint. A composite
        constraint yields one edge per column pair. The result is cached for
        the lifetime of this object.
        """
        if self._edges is None:
            edges: list[ForeignKeyEdge] = []
            for table in self.list_base_tables():
                edges.extend(self._reflect_foreign_keys(table))
            self._edges = edges
        return list(self._edges)

    def foreign_keys_referencing(self, table: str) -> list[ForeignKeyEdge]:
        """Return edges in which the table is the referenced (parent) side."""
        return [edge for edge in self.foreign_keys_of_schema() if edge.primary_table == table]

    def foreign_keys_originating_from(self, table: str) -> list[ForeignKeyEdge]:
        """Return edges owned by the table (it is the referencing side)."""
        if self._edges is not None:
            return [edge for edge in self._edges if edge.foreign_table == table]
        return self._reflect_foreign_keys(table)

    def describe_tables(self) -> list[TableSummary]:
        """Summarize every base table: primary key, columns and owned foreign keys."""
        return [
            TableSummary(
                name=table,
                primary_key=self.primary_key_of(table),
                columns=self.columns_of(table),
                foreign_keys=self.foreign_keys_originating_from(table),
            )
            for table in self.list_base_tables()
        ]

    def _reflect_columns(self, table: str) -> list[dict[str, Any]]:
        with _catalog_query("read columns", table):
            return list(self._inspector.get_columns(table, schema=self.schema))

    def _reflect_foreign_keys(self, table: str) -> list[ForeignKeyEdge]:
        try:
            with _catalog_query("read foreign keys", table):
                fks = self._inspector.get_foreign_keys(table, schema=self.schema)
        except NotImplementedError:
            # Some databases don't support FK introspection
            logger.debug(f"Foreign key introspection not supported for {self.dialect_name}")
            return []

        edges = []
        for fk in fks:
            referred_table = fk.get("referred_table")
            if not referred_table or referred_table in self._excluded:
                continue
            for foreign_column, primary_column in zip(
                fk.get("constrained_columns", []), fk.get("referred_columns", []), strict=False
            ):
                edges.append(
                    ForeignKeyEdge(
                        name=fk.get("name"),
                        primary_table=referred_table,
                        primary_column=primary_column,
                        foreign_table=table,
                        foreign_column=foreign_column,
                    )
                )
        return edges

    def _is_sqlite_rowid_alias(self, table: str, column: str) -> bool:
        # Only a single-column key declared exactly INTEGER aliases the rowid;
        # reflection folds INT into INTEGER, so read the declared type itself.
        with _catalog_query("read primary key", table):
            pk_columns = self._inspector.get_pk_constraint(table, schema=self.schema).get("constrained_columns")
            if pk_columns != [column]:
                return False
            params = {"table": table, "column": column}
            pragma = "pragma_table_info(:table)"
            if self.schema:
                params["schema"] = self.schema
                pragma = "pragma_table_info(:table, :schema)"
            declared_type = self._inspector.bind.execute(
                text(f"SELECT type FROM {pragma} WHERE name = :column"), params
            ).scalar()
        return (declared_type or "").strip().upper() == "INTEGER"

    def _render_type(self, column_type: Any) -> str:
        try:
            return str(column_type.compile(dialect=self._inspector.dialect))
        except CompileError:
            logger.debug(f"Column type {column_type!r} has no SQL rendering, using {UNTYPED_COLUMN_TYPE}")
            return UNTYPED_COLUMN_TYPE


@contextmanager
def open_catalog(
    connection_string: str,
    schema: str | None = None,
    exclude_tables: Iterable[str] = (),
) -> Iterator[CatalogMetadata]:
    """Open one catalog connection for the duration of a generation call.

    The connection is closed and the engine disposed on exit, whether the
    body finished or raised.

    Args:
        connection_string: SQLAlchemy URL or ODBC connection string
        schema: Database schema name (optional)
        exclude_tables: Extra table names to hide

    Yields:
        CatalogMetadata bound to the open connection

    Raises:
        CatalogConnectionError: If the database cannot be reached
    """
    engine = create_database_engine(connection_string)

    sanitized_conn = sanitize_connection_string(connection_string)

    try:
        try:
            connection = engine.connect()
        except SQLAlchemyError as e:
            raise CatalogConnectionError(f"Could not connect to {sanitized_conn}: {e}") from e

        with connection:
            try:
                inspector = inspect(connection)
            except SQLAlchemyError as e:
                raise CatalogConnectionError(f"Could not inspect catalog of {sanitized_conn}: {e}") from e

            logger.debug(f"Opened catalog session for {sanitized_conn}")
            yield CatalogMetadata(inspector, schema=schema, exclude_tables=exclude_tables)

    finally:
        engine.dispose()
