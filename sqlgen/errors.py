"""Errors raised while reading catalog metadata."""


class SqlGenError(Exception):
    """Base class for generation failures."""


class CatalogConnectionError(SqlGenError):
    """The catalog session could not be opened or used."""


class MetadataQueryError(SqlGenError):
    """A catalog query failed while generating a script."""

    def __init__(self, message: str, table: str | None = None) -> None:
        super().__init__(message)
        self.table = table
