"""Catalog access: engines, scoped sessions and metadata queries."""

from sqlgen.catalog.engine import create_database_engine, normalize_connection_string, sanitize_connection_string
from sqlgen.catalog.metadata import SYSTEM_TABLES, CatalogMetadata, open_catalog

__all__ = [
    # Engine
    "create_database_engine",
    "normalize_connection_string",
    "sanitize_connection_string",
    # Metadata
    "SYSTEM_TABLES",
    "CatalogMetadata",
    "open_catalog",
]
