"""
Type declaration generation from hoisted grammar rules.

Mapping of rule bodies to declaration shapes:

    STRING / PATTERN / BLANK   -> Alias(string)
    SYMBOL n                   -> Alias(n)
    SEQ [a, b, ...]            -> TupleShape([a, b, ...])
    REPEAT x                   -> Alias(list(x))
    CHOICE [a, b, ...]         -> Variant([RULE_CTOR_0 (a), RULE_CTOR_1 (b), ...])

Inside a declaration, SEQ nests as a tuple type and REPEAT as a list type.
A CHOICE below the top level cannot be expressed and must have been
hoisted beforehand.
"""

from __future__ import annotations

import logging

from .config import GeneratorConfig
from .errors import ErrorContext, InternalInvariantError
from .ir import (
    Alias,
    Blank,
    Choice,
    Constructor,
    Expression,
    Grammar,
    ListType,
    NamedType,
    Repeat,
    Rule,
    Seq,
    StringTerminal,
    Symbol,
    TupleShape,
    TupleType,
    TypeDecl,
    TypeExpr,
    Variant,
)

logger = logging.getLogger(__name__)


def constructor_name(rule_name: str, index: int, config: GeneratorConfig) -> str:
    """Constructor label for alternative ``index`` of ``rule_name``."""
    return f"{rule_name.upper()}{config.output.constructor_infix}{index}"


def type_expr(expr: Expression, rule_name: str, config: GeneratorConfig) -> TypeExpr:
    """
    Map a nested expression to a type expression.

    Raises:
        InternalInvariantError: If a CHOICE is found (hoisting was skipped)
    """
    if isinstance(expr, Symbol):
        return NamedType(name=expr.name)
    if isinstance(expr, (StringTerminal, Blank)):
        return NamedType(name=config.output.primitive_type)
    if isinstance(expr, Seq):
        return TupleType(items=[type_expr(m, rule_name, config) for m in expr.members])
    if isinstance(expr, Repeat):
        return ListType(item=type_expr(expr.content, rule_name, config))
    if isinstance(expr, Choice):
        raise InternalInvariantError(
            "nested CHOICE reached type generation; it should have been hoisted",
            ErrorContext(rule=rule_name, construct="CHOICE"),
        )
    raise InternalInvariantError(
        f"unexpected expression node {type(expr).__name__}",
        ErrorContext(rule=rule_name),
    )


def type_decl_for_rule(rule: Rule, config: GeneratorConfig) -> TypeDecl:
    """Map one hoisted rule to its type declaration."""
    body = rule.body

    if isinstance(body, Choice):
        shape: Alias | TupleShape | Variant = Variant(
            constructors=[
                Constructor(
                    name=constructor_name(rule.name, i, config),
                    payload=type_expr(member, rule.name, config),
                )
                for i, member in enumerate(body.members)
            ]
        )
    elif isinstance(body, Seq):
        shape = TupleShape(items=[type_expr(m, rule.name, config) for m in body.members])
    else:
        shape = Alias(target=type_expr(body, rule.name, config))

    return TypeDecl(name=rule.name, shape=shape)


def generate_type_decls(
    grammar: Grammar,
    order: list[str],
    config: GeneratorConfig | None = None,
) -> list[TypeDecl]:
    """
    Generate one TypeDecl per rule, following ``order``.

    Args:
        grammar: Hoisted grammar
        order: Rule names in emission order
        config: Generator configuration (defaults if omitted)

    Returns:
        Type declarations in emission order
    """
    config = config or GeneratorConfig()
    decls = [type_decl_for_rule(grammar.get_rule(name), config) for name in order]
    logger.info("Generated %d type declaration(s)", len(decls))
    return decls
