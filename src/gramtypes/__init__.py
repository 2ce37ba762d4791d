"""
gramtypes - typed parse tree declarations from tree-sitter grammars.

Reads a ``grammar.json`` and emits one mutually recursive block of
algebraic data type declarations describing the trees it produces.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import (
    DecodeError,
    GramtypesError,
    InternalInvariantError,
    UnknownRuleReferenceError,
    UnsupportedConstructError,
)
from .core.pipeline import generate_types, generate_types_from_file

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "GramtypesError",
    "DecodeError",
    "UnknownRuleReferenceError",
    "UnsupportedConstructError",
    "InternalInvariantError",
    "generate_types",
    "generate_types_from_file",
]
