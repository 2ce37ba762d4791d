"""
Grammar-level IR types.

A Grammar owns its rules in a name-keyed mapping used for lookup only.
Anything that needs a stable order goes through ``Grammar.order`` (source
declaration order, synthetic rules appended in creation order) or
``Grammar.extras`` (declared order of the extras list).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field

from ..errors import DecodeError, make_unknown_rule_error
from .expressions import Expression


class Rule(BaseModel):
    """
    One named production.

    Attributes:
        name: Rule name, also used as the generated type name
        body: Rule body expression
        is_extra: True if the rule is listed in the grammar's extras
        synthetic: True if the rule was created by hoisting
    """

    name: str
    body: Expression
    is_extra: bool = False
    synthetic: bool = False

    model_config = ConfigDict(frozen=True)


class Grammar(BaseModel):
    """
    A complete grammar: rules, root rule, and extras.

    Attributes:
        name: Grammar name from the source document
        root: Name of the root rule (first rule declared)
        rules: Rules keyed by name
        order: Rule names in declaration order
        extras: Names of extra rules in their declared order
    """

    name: str
    root: str
    rules: dict[str, Rule]
    order: list[str]
    extras: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_rules(
        cls,
        name: str,
        rules: Iterable[Rule],
        root: str | None = None,
        extras: Iterable[str] | None = None,
    ) -> Grammar:
        """
        Build a Grammar from rules in declaration order.

        The root defaults to the first rule. ``extras`` gives the declared
        order of extra rules; when omitted, rules flagged ``is_extra`` are
        taken in declaration order.
        """
        by_name: dict[str, Rule] = {}
        order: list[str] = []
        for rule in rules:
            if rule.name in by_name:
                raise DecodeError(f"Duplicate rule '{rule.name}'")
            by_name[rule.name] = rule
            order.append(rule.name)

        if not order:
            raise DecodeError(f"Grammar '{name}' defines no rules")

        root_name = root or order[0]
        if root_name not in by_name:
            raise make_unknown_rule_error(root_name)

        extra_names = list(dict.fromkeys(extras or []))
        for extra in extra_names:
            if extra not in by_name:
                raise make_unknown_rule_error(extra)
            if not by_name[extra].is_extra:
                by_name[extra] = by_name[extra].model_copy(update={"is_extra": True})
        # Flagged rules missing from the explicit list keep declaration order
        extra_names += [n for n in order if by_name[n].is_extra and n not in extra_names]

        return cls(
            name=name,
            root=root_name,
            rules=by_name,
            order=order,
            extras=extra_names,
        )

    def get_rule(self, name: str) -> Rule:
        """Look up a rule by name, raising UnknownRuleReferenceError if absent."""
        rule = self.rules.get(name)
        if rule is None:
            raise make_unknown_rule_error(name)
        return rule

    def has_rule(self, name: str) -> bool:
        return name in self.rules

    def iter_rules(self) -> Iterator[Rule]:
        """Iterate rules in declaration order."""
        for name in self.order:
            yield self.rules[name]

    @property
    def non_extra_rules(self) -> list[Rule]:
        return [r for r in self.iter_rules() if not r.is_extra]

    @property
    def extra_rules(self) -> list[Rule]:
        return [self.rules[n] for n in self.extras]


def rule_bodies(grammar: Grammar) -> dict[str, Expression]:
    """Return rule bodies keyed by name, in declaration order."""
    return {name: grammar.rules[name].body for name in grammar.order}
