"""SQL script generators."""

from sqlgen.generators.procedures import KEY_PARAMETER_TYPE, ProcedureGenerator
from sqlgen.generators.registry import NameRegistry
from sqlgen.generators.views import MAX_DEPTH, Branch, ViewGenerator

__all__ = [
    "KEY_PARAMETER_TYPE",
    "MAX_DEPTH",
    "Branch",
    "NameRegistry",
    "ProcedureGenerator",
    "ViewGenerator",
]
