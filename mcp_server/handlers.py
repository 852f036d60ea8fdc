"""Script generation handlers for MCP tools"""

import json
import logging

from sqlgen.catalog.engine import sanitize_connection_string
from sqlgen.errors import SqlGenError
from sqlgen.models import GenerationResult
from sqlgen.service import CONNECTION_STRING_REQUIRED, describe_schema, generate_procedures, generate_views

logger = logging.getLogger(__name__)


def result_to_json(result: GenerationResult, action: str) -> str:
    """Serialize a generation result for a tool response

    Args:
        result: Generation result
        action: What was attempted, used in the error message (e.g. 'views')

    Returns:
        JSON string with success and either generatedSQL or message
    """
    if result.success:
        return json.dumps({"success": True, "generatedSQL": result.script}, indent=2)

    if result.error and result.error.kind == "validation":
        message = result.error.detail
    else:
        detail = result.error.detail if result.error else "Unknown error"
        message = f"Error generating {action}: {detail}"
    return json.dumps({"success": False, "message": message}, indent=2)


class GeneratorHandler:
    """Handles all generation tools (stateless: each call opens its own catalog session)"""

    def generate_procedures(
        self,
        connection_string: str,
        schema: str | None = None,
        exclude_tables: list[str] | None = None,
    ) -> str:
        """Generate CRUD and foreign key stored procedures

        Args:
            connection_string: Database connection string
            schema: Database schema name (optional)
            exclude_tables: Tables to leave out

        Returns:
            JSON string containing the script or an error message
        """
        result = generate_procedures(connection_string, schema=schema, exclude_tables=exclude_tables or ())
        return result_to_json(result, "procedures")

    def generate_views(
        self,
        connection_string: str,
        schema: str | None = None,
        exclude_tables: list[str] | None = None,
    ) -> str:
        """Generate multi-level join views along foreign key chains

        Args:
            connection_string: Database connection string
            schema: Database schema name (optional)
            exclude_tables: Tables to leave out

        Returns:
            JSON string containing the script or an error message
        """
        result = generate_views(connection_string, schema=schema, exclude_tables=exclude_tables or ())
        return result_to_json(result, "views")

    def list_tables(
        self,
        connection_string: str,
        schema: str | None = None,
        exclude_tables: list[str] | None = None,
    ) -> str:
        """List base tables with primary keys, columns and foreign keys

        Args:
            connection_string: Database connection string
            schema: Database schema name (optional)
            exclude_tables: Tables to leave out

        Returns:
            JSON string containing the table list or an error message
        """
        if not connection_string or not connection_string.strip():
            return json.dumps({"success": False, "message": CONNECTION_STRING_REQUIRED}, indent=2)

        try:
            summaries = describe_schema(connection_string, schema=schema, exclude_tables=exclude_tables or ())
        except SqlGenError as e:
            sanitized_conn = sanitize_connection_string(connection_string)
            logger.error(f"Failed to list tables for {sanitized_conn}: {e}")
            return json.dumps({"success": False, "message": f"Error listing tables: {e!s}"}, indent=2)

        tables = [summary.model_dump(mode="json") for summary in summaries]
        return json.dumps({"success": True, "tables": tables, "count": len(tables)}, indent=2)
