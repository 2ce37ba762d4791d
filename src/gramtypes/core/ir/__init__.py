"""
gramtypes Intermediate Representation (IR) types.

- expressions: rule body nodes and the rewrite primitive
- grammar: rules and the grammar container
- types: generated type declarations
"""

# Rule body expressions
from .expressions import (
    Blank,
    Choice,
    Expression,
    Repeat,
    Seq,
    StringTerminal,
    Symbol,
    contains_nested_choice,
    direct_children,
    iter_symbols,
    map_direct_children,
)

# Grammar
from .grammar import (
    Grammar,
    Rule,
    rule_bodies,
)

# Type declarations
from .types import (
    Alias,
    Constructor,
    ListType,
    NamedType,
    TupleShape,
    TupleType,
    TypeDecl,
    TypeExpr,
    TypeShape,
    Variant,
)

__all__ = [
    # Expressions
    "Blank",
    "Choice",
    "Expression",
    "Repeat",
    "Seq",
    "StringTerminal",
    "Symbol",
    "contains_nested_choice",
    "direct_children",
    "iter_symbols",
    "map_direct_children",
    # Grammar
    "Grammar",
    "Rule",
    "rule_bodies",
    # Types
    "Alias",
    "Constructor",
    "ListType",
    "NamedType",
    "TupleShape",
    "TupleType",
    "TypeDecl",
    "TypeExpr",
    "TypeShape",
    "Variant",
]
