"""Entry points for callers: one catalog session per call, results instead of exceptions."""

import logging
from collections.abc import Callable, Iterable

from sqlgen.catalog.engine import sanitize_connection_string
from sqlgen.catalog.metadata import CatalogMetadata, open_catalog
from sqlgen.errors import CatalogConnectionError, MetadataQueryError
from sqlgen.generators.procedures import ProcedureGenerator
from sqlgen.generators.registry import NameRegistry
from sqlgen.generators.views import ViewGenerator
from sqlgen.models import GenerationResult, ScriptKind, TableSummary

logger = logging.getLogger(__name__)

CONNECTION_STRING_REQUIRED = "Connection string is required."


def _run(
    kind: ScriptKind,
    generate: Callable[[CatalogMetadata], str],
    connection_string: str | None,
    schema: str | None,
    exclude_tables: Iterable[str],
) -> GenerationResult:
    if not connection_string or not connection_string.strip():
        return GenerationResult.failed(kind, "validation", CONNECTION_STRING_REQUIRED)

    sanitized_conn = sanitize_connection_string(connection_string)
    logger.info(f"Generating {kind} for {sanitized_conn}")

    try:
        with open_catalog(connection_string, schema=schema, exclude_tables=exclude_tables) as catalog:
            script = generate(catalog)
    except CatalogConnectionError as e:
        logger.error(f"Connection failed while generating {kind}: {e}")
        return GenerationResult.failed(kind, "connection", str(e))
    except MetadataQueryError as e:
        logger.error(f"Catalog query failed while generating {kind} for {sanitized_conn}: {e}")
        return GenerationResult.failed(kind, "metadata", str(e))
    except Exception as e:
        # Log with sanitized connection string
        logger.exception(f"Unexpected failure while generating {kind} for {sanitized_conn}")
        return GenerationResult.failed(kind, "metadata", f"Unexpected error: {e!s}")

    return GenerationResult.ok(kind, script)


def generate_procedures(
    connection_string: str | None,
    schema: str | None = None,
    exclude_tables: Iterable[str] = (),
) -> GenerationResult:
    """Generate CRUD and foreign key stored procedures for every table.

    Args:
        connection_string: SQLAlchemy URL or ODBC connection string
        schema: Database schema name (optional)
        exclude_tables: Table names to leave out

    Returns:
        GenerationResult holding the script or the failure
    """
    return _run(
        "procedures",
        lambda catalog: ProcedureGenerator(catalog, NameRegistry()).generate_all(),
        connection_string,
        schema,
        exclude_tables,
    )


def generate_views(
    connection_string: str | None,
    schema: str | None = None,
    exclude_tables: Iterable[str] = (),
) -> GenerationResult:
    """Generate multi-level join views along every foreign key chain.

    Args:
        connection_string: SQLAlchemy URL or ODBC connection string
        schema: Database schema name (optional)
        exclude_tables: Table names to leave out

    Returns:
        GenerationResult holding the script or the failure
    """
    return _run(
        "views",
        lambda catalog: ViewGenerator(catalog, NameRegistry()).generate_all(),
        connection_string,
        schema,
        exclude_tables,
    )


def describe_schema(
    connection_string: str,
    schema: str | None = None,
    exclude_tables: Iterable[str] = (),
) -> list[TableSummary]:
    """List base tables with their primary key, columns and foreign keys.

    Raises:
        ValueError: If the connection string is empty
        CatalogConnectionError: If the database cannot be reached
        MetadataQueryError: If a catalog query fails
    """
    if not connection_string or not connection_string.strip():
        raise ValueError(CONNECTION_STRING_REQUIRED)

    with open_catalog(connection_string, schema=schema, exclude_tables=exclude_tables) as catalog:
        return catalog.describe_tables()
