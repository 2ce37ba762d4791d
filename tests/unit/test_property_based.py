"""
Property-based tests using Hypothesis.

Random grammars are built from SYMBOL/STRING/BLANK leaves combined with
SEQ/CHOICE/REPEAT. Symbols only refer to declared non-extra rules, and
extra rules are plain terminals, so every generated grammar is valid input.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from gramtypes.core import ir
from gramtypes.core.graph import emission_order
from gramtypes.core.hoist import hoist_grammar
from gramtypes.core.pipeline import build_type_decls, generate_types

RULE_NAMES = ["program", "statement", "expr", "item", "term", "atom"]
EXTRA_NAMES = ["comment", "whitespace"]


def expressions(names: list[str]) -> st.SearchStrategy[ir.Expression]:
    """Random rule bodies whose symbols are drawn from ``names``."""
    leaves = st.one_of(
        st.sampled_from(names).map(lambda n: ir.Symbol(name=n)),
        st.sampled_from(["+", ";", "("]).map(lambda v: ir.StringTerminal(value=v)),
        st.just(ir.Blank()),
    )
    return st.recursive(
        leaves,
        lambda children: st.one_of(
            st.lists(children, min_size=1, max_size=3).map(lambda m: ir.Seq(members=m)),
            st.lists(children, min_size=1, max_size=3).map(lambda m: ir.Choice(members=m)),
            children.map(lambda c: ir.Repeat(content=c)),
            children.map(lambda c: ir.Repeat(type="REPEAT1", content=c)),
        ),
        max_leaves=12,
    )


@st.composite
def grammars(draw) -> ir.Grammar:
    """A grammar of 1-6 rules plus 0-2 terminal extras."""
    count = draw(st.integers(min_value=1, max_value=len(RULE_NAMES)))
    names = RULE_NAMES[:count]
    rules = [ir.Rule(name=n, body=draw(expressions(names))) for n in names]

    extras = draw(st.lists(st.sampled_from(EXTRA_NAMES), unique=True, max_size=2))
    for extra in sorted(extras):
        body = ir.StringTerminal(type="PATTERN", value=f"{extra}.*")
        rules.append(ir.Rule(name=extra, body=body, is_extra=True))

    return ir.Grammar.from_rules("generated", rules, extras=extras)


def _reversed_mapping(grammar: ir.Grammar) -> ir.Grammar:
    return ir.Grammar(
        name=grammar.name,
        root=grammar.root,
        rules=dict(reversed(list(grammar.rules.items()))),
        order=grammar.order,
        extras=grammar.extras,
    )


def _declared_names(text: str) -> list[str]:
    return [
        line.split(" = ")[0].split(" ")[-1]
        for line in text.splitlines()
        if line.startswith(("type ", "and "))
    ]


class TestHoistingProperties:
    @given(grammars())
    @settings(max_examples=200)
    def test_hoisting_is_idempotent(self, grammar: ir.Grammar) -> None:
        """Invariant: hoisting an already hoisted grammar changes nothing."""
        once = hoist_grammar(grammar)
        assert hoist_grammar(once) == once

    @given(grammars())
    @settings(max_examples=200)
    def test_no_nested_choice_after_hoisting(self, grammar: ir.Grammar) -> None:
        """Invariant: every CHOICE left is a whole rule body."""
        hoisted = hoist_grammar(grammar)
        for rule in hoisted.non_extra_rules:
            assert not ir.contains_nested_choice(rule.body), rule.name

    @given(grammars())
    @settings(max_examples=100)
    def test_declared_rules_and_extras_preserved(self, grammar: ir.Grammar) -> None:
        """Invariant: hoisting only adds synthetic rules after the declared ones."""
        hoisted = hoist_grammar(grammar)
        assert hoisted.order[: len(grammar.order)] == grammar.order
        assert hoisted.extras == grammar.extras
        assert hoisted.root == grammar.root
        for rule in grammar.extra_rules:
            assert hoisted.get_rule(rule.name) == rule
        assert all(r.synthetic for r in hoisted.iter_rules() if r.name not in grammar.rules)


class TestOrderingProperties:
    @given(grammars())
    @settings(max_examples=200)
    def test_every_rule_emitted_once_extras_last(self, grammar: ir.Grammar) -> None:
        """Invariant: order is a permutation of the rules ending with the extras."""
        hoisted = hoist_grammar(grammar)
        order = emission_order(hoisted)

        assert sorted(order) == sorted(hoisted.order)
        assert order[len(order) - len(hoisted.extras) :] == hoisted.extras
        assert order[0] == hoisted.root

    @given(grammars())
    @settings(max_examples=100)
    def test_order_independent_of_mapping_order(self, grammar: ir.Grammar) -> None:
        """Invariant: only declaration order matters, not dict iteration order."""
        hoisted = hoist_grammar(grammar)
        assert emission_order(_reversed_mapping(hoisted)) == emission_order(hoisted)


class TestOutputProperties:
    @given(grammars())
    @settings(max_examples=100)
    def test_output_is_deterministic(self, grammar: ir.Grammar) -> None:
        """Invariant: repeated runs produce byte-identical text."""
        first = generate_types(grammar)
        assert generate_types(grammar) == first
        assert generate_types(_reversed_mapping(grammar)) == first

    @given(grammars())
    @settings(max_examples=100)
    def test_each_declaration_once_and_references_resolve(self, grammar: ir.Grammar) -> None:
        """Invariant: one declaration per rule, and every name used is declared."""
        text = generate_types(grammar)
        declared = _declared_names(text)

        assert len(declared) == len(set(declared))
        assert set(declared) == set(hoist_grammar(grammar).order)
        assert text.startswith("type ")
        assert text.endswith("\n;\n")

        hoisted = hoist_grammar(grammar)
        for rule in hoisted.iter_rules():
            for target in ir.iter_symbols(rule.body):
                assert target in declared

    @given(grammars())
    @settings(max_examples=100)
    def test_extras_render_as_aliases(self, grammar: ir.Grammar) -> None:
        """Invariant: terminal extras become plain aliases of the primitive type."""
        decls = {d.name: d for d in build_type_decls(grammar)}
        for name in grammar.extras:
            assert decls[name].shape == ir.Alias(target=ir.NamedType(name="string"))
