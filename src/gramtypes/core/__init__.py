"""Core gramtypes functionality: IR, decoding, hoisting, ordering, generation, printing."""

from . import ir
from .config import GeneratorConfig, load_config
from .errors import (
    ConfigError,
    DecodeError,
    ErrorContext,
    GramtypesError,
    InternalInvariantError,
    UnknownRuleReferenceError,
    UnsupportedConstructError,
)
from .graph import DependencyGraph, emission_order
from .hoist import hoist_grammar
from .loader import load_grammar, parse_grammar
from .name_gen import NameGenerator
from .pipeline import build_type_decls, generate_types, generate_types_from_file
from .printer import render_type_decls
from .type_gen import generate_type_decls

__all__ = [
    "ir",
    "GramtypesError",
    "DecodeError",
    "UnknownRuleReferenceError",
    "UnsupportedConstructError",
    "InternalInvariantError",
    "ConfigError",
    "ErrorContext",
    "GeneratorConfig",
    "load_config",
    "load_grammar",
    "parse_grammar",
    "NameGenerator",
    "hoist_grammar",
    "DependencyGraph",
    "emission_order",
    "generate_type_decls",
    "render_type_decls",
    "build_type_decls",
    "generate_types",
    "generate_types_from_file",
]
