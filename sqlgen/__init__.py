"""Generate stored procedures and join views from a database catalog.

This package reads table, column, key and identity metadata from a live
database and emits T-SQL scripts.
"""

from sqlgen.errors import CatalogConnectionError, MetadataQueryError, SqlGenError
from sqlgen.models import GenerationResult
from sqlgen.service import describe_schema, generate_procedures, generate_views

__version__ = "0.1.0"

__all__ = [
    "CatalogConnectionError",
    "GenerationResult",
    "MetadataQueryError",
    "SqlGenError",
    "__version__",
    "describe_schema",
    "generate_procedures",
    "generate_views",
]
