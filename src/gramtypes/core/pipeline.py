"""
End-to-end generation: grammar in, declaration block out.

Stages run in a fixed sequence: decode, hoist nested choices, build the
dependency graph, compute emission order, map rules to type declarations,
render. Any stage may raise a GramtypesError; nothing is emitted on failure.
"""

from pathlib import Path

from . import ir
from .config import GeneratorConfig
from .graph import DependencyGraph, emission_order
from .hoist import hoist_grammar
from .loader import load_grammar
from .printer import render_type_decls
from .type_gen import generate_type_decls


def build_type_decls(
    grammar: ir.Grammar, config: GeneratorConfig | None = None
) -> list[ir.TypeDecl]:
    """
    Run the pipeline up to type declaration generation.

    Performs:
    1. Hoisting of nested choices into synthetic rules
    2. Dependency graph construction and reference validation
    3. Emission ordering
    4. Type declaration mapping

    Args:
        grammar: Decoded grammar
        config: Generator configuration (defaults if omitted)

    Returns:
        Type declarations in emission order

    Raises:
        GramtypesError: If any stage fails; there is no partial output
    """
    config = config or GeneratorConfig()
    hoisted = hoist_grammar(grammar)
    graph = DependencyGraph.from_grammar(hoisted)
    order = emission_order(hoisted, graph)
    return generate_type_decls(hoisted, order, config)


def generate_types(grammar: ir.Grammar, config: GeneratorConfig | None = None) -> str:
    """Render the complete type declaration block for a grammar."""
    config = config or GeneratorConfig()
    return render_type_decls(build_type_decls(grammar, config), config)


def generate_types_from_file(path: Path, config: GeneratorConfig | None = None) -> str:
    """Load ``grammar.json`` from ``path`` and render its type declarations."""
    config = config or GeneratorConfig()
    return generate_types(load_grammar(path, config), config)
