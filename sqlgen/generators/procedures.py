"""CRUD and foreign-key stored procedure generation."""

import logging

from sqlgen.catalog.metadata import CatalogMetadata
from sqlgen.generators.registry import NameRegistry
from sqlgen.models import ColumnDescriptor, ForeignKeyEdge, PrimaryKeyInfo

logger = logging.getLogger(__name__)

# Key filter parameters assume integer surrogate keys, whatever the column type
KEY_PARAMETER_TYPE = "INT"

INDENT = "    "


def _column_list(columns: list[ColumnDescriptor]) -> str:
    return ", ".join(f"[{col.name}]" for col in columns)


def _procedure(name: str, body: list[str], parameters: list[str] | None = None) -> str:
    """Render one CREATE PROCEDURE batch.

    Args:
        name: Procedure name
        body: Statements placed between BEGIN and END
        parameters: Parameter declarations (``@Name TYPE``)

    Returns:
        The procedure wrapped in GO batch separators
    """
    lines = ["GO", f"CREATE PROCEDURE {name}"]
    if parameters:
        lines.append(",\n".join(f"{INDENT}{param}" for param in parameters))
    lines += ["AS", "BEGIN"]
    lines += [f"{INDENT}{statement}" for statement in body]
    lines += ["END", "GO"]
    return "\n".join(lines)


def render_get_all(table: str, columns: list[ColumnDescriptor]) -> str:
    return _procedure(f"GetAll{table}", [f"SELECT {_column_list(columns)} FROM [{table}];"])


def render_get_by_primary_key(table: str, primary_key: PrimaryKeyInfo, columns: list[ColumnDescriptor]) -> str:
    pk = primary_key.column
    return _procedure(
        f"Get{table}By{pk}",
        [f"SELECT {_column_list(columns)} FROM [{table}]", f"WHERE [{pk}] = @{pk};"],
        [f"@{pk} {KEY_PARAMETER_TYPE}"],
    )


def render_insert(table: str, primary_key: PrimaryKeyInfo, columns: list[ColumnDescriptor]) -> str:
    """Render Insert<Table>.

    An auto-increment primary key is left out of the parameters and the
    inserted columns, and the new identity value is returned as NewID.
    """
    if primary_key.is_auto_increment:
        insert_columns = [col for col in columns if col.name != primary_key.column]
    else:
        insert_columns = list(columns)

    if insert_columns:
        values = ", ".join(f"@{col.name}" for col in insert_columns)
        body = [f"INSERT INTO [{table}] ({_column_list(insert_columns)})", f"VALUES ({values});"]
    else:
        body = [f"INSERT INTO [{table}] DEFAULT VALUES;"]

    if primary_key.is_auto_increment:
        body.append("SELECT SCOPE_IDENTITY() AS NewID;")

    parameters = [f"@{col.name} {col.declared_type}" for col in insert_columns]
    return _procedure(f"Insert{table}", body, parameters)


def render_update(table: str, primary_key: PrimaryKeyInfo, columns: list[ColumnDescriptor]) -> str | None:
    """Render Update<Table>By<PK>, or None when the table has no column besides its key."""
    pk = primary_key.column
    non_key_columns = [col for col in columns if col.name != pk]
    if not non_key_columns:
        return None

    set_clause = ", ".join(f"[{col.name}] = @{col.name}" for col in non_key_columns)
    parameters = [f"@{pk} {KEY_PARAMETER_TYPE}"] + [f"@{col.name} {col.declared_type}" for col in non_key_columns]
    return _procedure(
        f"Update{table}By{pk}",
        [f"UPDATE [{table}]", f"SET {set_clause}", f"WHERE [{pk}] = @{pk};"],
        parameters,
    )


def render_delete_by_primary_key(table: str, primary_key: PrimaryKeyInfo) -> str:
    pk = primary_key.column
    return _procedure(
        f"Delete{table}By{pk}",
        [f"DELETE FROM [{table}] WHERE [{pk}] = @{pk};"],
        [f"@{pk} {KEY_PARAMETER_TYPE}"],
    )


def render_get_by_foreign_key(table: str, foreign_key: ForeignKeyEdge) -> str:
    fk = foreign_key.foreign_column
    return _procedure(
        f"Get{table}By{fk}",
        [f"SELECT * FROM [{table}] WHERE [{fk}] = @{fk};"],
        [f"@{fk} {KEY_PARAMETER_TYPE}"],
    )


def render_delete_by_foreign_key(table: str, foreign_key: ForeignKeyEdge) -> str:
    fk = foreign_key.foreign_column
    return _procedure(
        f"Delete{table}By{fk}",
        [f"DELETE FROM [{table}] WHERE [{fk}] = @{fk};"],
        [f"@{fk} {KEY_PARAMETER_TYPE}"],
    )


class ProcedureGenerator:
    """Generates CRUD procedures per table and lookup/cascade procedures per foreign key.

    Args:
        catalog: Metadata of an open catalog session
        registry: Names already emitted in this run (a new one by default)
    """

    def __init__(self, catalog: CatalogMetadata, registry: NameRegistry | None = None) -> None:
        self.catalog = catalog
        self.registry = registry if registry is not None else NameRegistry()

    def generate_all(self) -> str:
        """Generate procedures for every base table with a primary key.

        Returns:
            One script, each table's procedures preceded by a comment line
        """
        sections = []
        for table in self.catalog.list_base_tables():
            procedures = self.generate_for_table(table)
            if procedures:
                sections.append(f"-- Stored Procedures for Table: [{table}]\n" + "\n\n".join(procedures) + "\n")

        logger.info(f"Generated {len(self.registry)} stored procedures")
        return "\n".join(sections)

    def generate_for_table(self, table: str) -> list[str]:
        """Generate the procedures of one table, skipping names already emitted.

        Args:
            table: Table name

        Returns:
            Procedure scripts in emission order (empty for tables without a primary key)
        """
        primary_key = self.catalog.primary_key_of(table)
        if primary_key is None:
            logger.debug(f"Skipping table '{table}': no primary key")
            return []

        foreign_keys = self.catalog.foreign_keys_originating_from(table)
        columns = self.catalog.columns_of(table)
        pk = primary_key.column

        candidates: list[tuple[str, str | None]] = [
            (f"GetAll{table}", render_get_all(table, columns)),
            (f"Get{table}By{pk}", render_get_by_primary_key(table, primary_key, columns)),
            (f"Insert{table}", render_insert(table, primary_key, columns)),
            (f"Update{table}By{pk}", render_update(table, primary_key, columns)),
            (f"Delete{table}By{pk}", render_delete_by_primary_key(table, primary_key)),
        ]
        for foreign_key in foreign_keys:
            fk = foreign_key.foreign_column
            candidates.append((f"Get{table}By{fk}", render_get_by_foreign_key(table, foreign_key)))
            candidates.append((f"Delete{table}By{fk}", render_delete_by_foreign_key(table, foreign_key)))

        procedures = []
        for name, script in candidates:
            if script is None:
                logger.debug(f"Skipping {name}: table '{table}' has no non-key columns")
                continue
            if not self.registry.register(name):
                logger.debug(f"Skipping duplicate procedure name {name}")
                continue
            procedures.append(script)
        return procedures
