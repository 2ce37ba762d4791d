"""
Rule dependency graph and declaration emission order.

Handles reference validation, extra-rule isolation checks, and the
deterministic ordering of type declarations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .errors import make_unknown_rule_error, make_unsupported_error
from .ir import Grammar, Rule, contains_nested_choice, iter_symbols

logger = logging.getLogger(__name__)


@dataclass
class DependencyGraph:
    """
    Directed graph of rule-to-rule references between non-extra rules.

    Successor lists keep the order in which references are first
    encountered in a rule body, without duplicates. Self-references and
    cycles are allowed.
    """

    edges: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def from_grammar(cls, grammar: Grammar) -> DependencyGraph:
        """
        Build the dependency graph of a (hoisted) grammar.

        Raises:
            UnknownRuleReferenceError: If a symbol names an undefined rule
            UnsupportedConstructError: If extra and non-extra rules reference
                each other, or an extra rule has a nested choice
        """
        graph = cls()
        extras = set(grammar.extras)

        for rule in grammar.iter_rules():
            if rule.is_extra:
                _check_extra_rule(rule)
                continue

            graph.add_node(rule.name)
            for target in iter_symbols(rule.body):
                if not grammar.has_rule(target):
                    raise make_unknown_rule_error(target, rule=rule.name)
                if target in extras:
                    raise make_unsupported_error(
                        "extra reference",
                        rule.name,
                        detail=f"reference to extra rule '{target}' from a non-extra rule",
                    )
                graph.add_edge(rule.name, target)

        return graph

    def add_node(self, name: str) -> None:
        self.edges.setdefault(name, [])

    def add_edge(self, source: str, target: str) -> None:
        """Add ``source -> target``; repeated edges are ignored."""
        successors = self.edges.setdefault(source, [])
        if target not in successors:
            logger.debug("Dependency edge %s -> %s", source, target)
            successors.append(target)
        self.add_node(target)

    def successors(self, name: str) -> list[str]:
        return list(self.edges.get(name, []))

    def has_edge(self, source: str, target: str) -> bool:
        return target in self.edges.get(source, [])

    @property
    def nodes(self) -> list[str]:
        return list(self.edges)


def _check_extra_rule(rule: Rule) -> None:
    """Extra rules must be terminal-like: no references, no nested choices."""
    target = next(iter_symbols(rule.body), None)
    if target is not None:
        raise make_unsupported_error(
            "extra reference",
            rule.name,
            detail=f"extra rule references rule '{target}'",
        )
    if contains_nested_choice(rule.body):
        raise make_unsupported_error(
            "CHOICE",
            rule.name,
            detail="extra rule contains a nested CHOICE",
        )


def emission_order(grammar: Grammar, graph: DependencyGraph | None = None) -> list[str]:
    """
    Compute the order in which type declarations are emitted.

    Pre-order depth-first traversal from the root rule, visiting successors
    in first-encounter order and skipping rules already emitted (so cycles
    terminate). Non-extra rules not reachable from the root follow in
    declaration order, then extra rules in their declared order.

    Args:
        grammar: Hoisted grammar
        graph: Dependency graph; built from the grammar if omitted

    Returns:
        Every rule name exactly once
    """
    if graph is None:
        graph = DependencyGraph.from_grammar(grammar)

    order: list[str] = []
    visited: set[str] = set()

    stack = [grammar.root] if grammar.root in graph.edges else []
    while stack:
        name = stack.pop()
        if name in visited:
            continue
        visited.add(name)
        order.append(name)
        # Reversed so the first successor is popped next
        stack.extend(reversed([s for s in graph.successors(name) if s not in visited]))

    unreached = [r.name for r in grammar.non_extra_rules if r.name not in visited]
    if unreached:
        logger.debug("Rules unreachable from '%s': %s", grammar.root, ", ".join(unreached))

    order.extend(unreached)
    order.extend(grammar.extras)

    logger.info(
        "Emission order: %d rule(s), %d unreachable, %d extra",
        len(order),
        len(unreached),
        len(grammar.extras),
    )
    return order
