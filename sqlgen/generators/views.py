"""Multi-level join view generation along foreign key chains.

Every foreign key edge seeds an independent traversal. From the table just
joined, the traversal follows each relationship in which that table is the
referenced parent, emitting one view per distinct path::

    A <- B <- C   gives   A_B_View, A_B_C_View, B_C_View

A branch stops when the next table was already joined on it, when it is more than
MAX_DEPTH edges deep, or when its path name was already emitted by another
branch. In the last case nothing below that point is explored either.
"""

import logging
from typing import NamedTuple

from sqlgen.catalog.metadata import CatalogMetadata
from sqlgen.generators.registry import NameRegistry
from sqlgen.models import ForeignKeyEdge

logger = logging.getLogger(__name__)

MAX_DEPTH = 5

RULE = "--------------------------"


class Branch(NamedTuple):
    """State of one traversal branch. Extending it returns a new value."""

    path: tuple[str, ...]
    visited: frozenset[str] = frozenset()
    joins: tuple[str, ...] = ()
    columns: tuple[str, ...] = ()

    @property
    def view_name(self) -> str:
        return "_".join(self.path) + "_View"

    def extend(self, table: str, join: str, columns: tuple[str, ...]) -> "Branch":
        return Branch(
            path=(*self.path, table),
            visited=self.visited | {table},
            joins=(*self.joins, join),
            columns=self.columns + columns,
        )


def render_view(branch: Branch) -> str:
    """Render the CREATE VIEW batch of a branch. FROM always names the seed table."""
    lines = [
        RULE,
        "GO",
        f"CREATE VIEW [{branch.view_name}] AS",
        "SELECT " + ",\n       ".join(branch.columns),
        f"FROM [{branch.path[0]}]",
        *branch.joins,
        "GO",
        RULE,
    ]
    return "\n".join(lines)


class ViewGenerator:
    """Generates join views for every foreign key chain in the schema.

    Args:
        catalog: Metadata of an open catalog session
        registry: View names already emitted in this run (a new one by default)
    """

    def __init__(self, catalog: CatalogMetadata, registry: NameRegistry | None = None) -> None:
        self.catalog = catalog
        self.registry = registry if registry is not None else NameRegistry()
        self._column_cache: dict[str, tuple[str, ...]] = {}

    def generate_all(self) -> str:
        """Generate views for all foreign key paths.

        Returns:
            One script with a CREATE VIEW batch per distinct path
        """
        views: list[str] = []
        for edge in self.catalog.foreign_keys_of_schema():
            self._visit(edge, Branch(path=(edge.primary_table,)), level=1, views=views)

        logger.info(f"Generated {len(views)} views")
        return "\n\n".join(views) + "\n" if views else ""

    def _visit(self, edge: ForeignKeyEdge, branch: Branch, level: int, views: list[str]) -> None:
        primary_table, foreign_table = edge.primary_table, edge.foreign_table

        # Cycle and depth guard
        if foreign_table in branch.visited or level > MAX_DEPTH:
            return

        columns = self._aliased_columns(foreign_table)
        if level == 1:
            columns = self._aliased_columns(primary_table) + columns

        join = (
            f"INNER JOIN [{foreign_table}] ON [{primary_table}].[{edge.primary_column}]"
            f" = [{foreign_table}].[{edge.foreign_column}]"
        )
        branch = branch.extend(foreign_table, join, columns)

        if not self.registry.register(branch.view_name):
            logger.debug(f"Pruning branch at already generated view {branch.view_name}")
            return

        views.append(render_view(branch))

        for next_edge in self.catalog.foreign_keys_referencing(foreign_table):
            if next_edge.foreign_table not in branch.visited:
                self._visit(next_edge, branch, level + 1, views)

    def _aliased_columns(self, table: str) -> tuple[str, ...]:
        # [Table].[Column] AS [TableColumn]
        if table not in self._column_cache:
            self._column_cache[table] = tuple(
                f"[{table}].[{col.name}] AS [{table}{col.name}]" for col in self.catalog.columns_of(table)
            )
        return self._column_cache[table]
