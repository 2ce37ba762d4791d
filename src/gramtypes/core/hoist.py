"""
Hoisting of nested alternations into synthetic rules.

The target type system has no anonymous sum types, so every ``CHOICE`` must
become a named declaration. A ``CHOICE`` that is a rule's whole body stays
where it is; any ``CHOICE`` found below the top level is replaced by a
``SYMBOL`` pointing at a new rule whose body is that ``CHOICE``.

Synthetic rules are themselves processed the same way, so a choice nested
inside an extracted choice is extracted on the next round. Names come from a
NameGenerator using the originating rule's name as prefix:

    program = repeat(choice(a, b))
    =>
    program   = repeat(program_0)
    program_0 = choice(a, b)
"""

from __future__ import annotations

import logging
from collections import deque

from .ir import Choice, Expression, Grammar, Rule, Symbol, map_direct_children
from .name_gen import NameGenerator

logger = logging.getLogger(__name__)


def hoist_rule(
    rule: Rule,
    owner: str,
    name_gen: NameGenerator,
    taken: set[str],
) -> tuple[Rule, list[Rule]]:
    """
    Extract every nested ``CHOICE`` of one rule body.

    The walk does not descend into an extracted choice; its own nested
    choices are handled when the returned synthetic rule is hoisted.

    Args:
        rule: Rule to rewrite
        owner: Prefix for generated names (the originating grammar rule)
        name_gen: Generator for fresh names
        taken: Names already in use; updated with every name handed out

    Returns:
        Tuple of (rewritten rule, synthetic rules in encounter order)
    """
    extracted: list[Rule] = []

    def fresh_name() -> str:
        name = name_gen.fresh(owner)
        while name in taken:
            name = name_gen.fresh(owner)
        taken.add(name)
        return name

    def visit(node: Expression) -> Expression:
        if isinstance(node, Choice):
            name = fresh_name()
            logger.debug("Hoisting nested choice in '%s' as '%s'", rule.name, name)
            extracted.append(Rule(name=name, body=node, synthetic=True))
            return Symbol(name=name)
        return map_direct_children(node, visit)

    # The top-level node is never extracted, whatever its shape
    new_body = map_direct_children(rule.body, visit)
    if not extracted:
        return rule, extracted
    return rule.model_copy(update={"body": new_body}), extracted


def hoist_grammar(grammar: Grammar, name_gen: NameGenerator | None = None) -> Grammar:
    """
    Rewrite a grammar so no rule body contains a nested ``CHOICE``.

    Extra rules are passed through untouched. Rules are visited in
    declaration order and synthetic rules are appended after the declared
    ones, in creation order. The input grammar is not modified.

    Args:
        grammar: Grammar to rewrite
        name_gen: Optional generator; a fresh one is used by default

    Returns:
        New Grammar with hoisted rules
    """
    name_gen = name_gen or NameGenerator()
    taken = set(grammar.rules)

    declared: list[Rule] = []
    synthetic: list[Rule] = []

    for rule in grammar.iter_rules():
        if rule.is_extra:
            declared.append(rule)
            continue

        new_rule, pending = hoist_rule(rule, rule.name, name_gen, taken)
        declared.append(new_rule)

        queue = deque(pending)
        while queue:
            current = queue.popleft()
            new_rule, pending = hoist_rule(current, rule.name, name_gen, taken)
            synthetic.append(new_rule)
            queue.extend(pending)

    if synthetic:
        logger.info(
            "Hoisted %d nested choice(s) in grammar '%s'", len(synthetic), grammar.name
        )

    return Grammar.from_rules(
        grammar.name,
        declared + synthetic,
        root=grammar.root,
        extras=grammar.extras,
    )
