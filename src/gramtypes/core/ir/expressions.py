"""
Rule body expression types for the gramtypes IR.

Each node carries a ``type`` discriminator equal to its tag in tree-sitter's
``grammar.json`` encoding, so a rule body validates directly into the model:

- SYMBOL: reference to another rule
- STRING / PATTERN: terminal tokens
- BLANK: empty production
- SEQ: ordered sequence
- CHOICE: ordered alternation
- REPEAT / REPEAT1: repetition of a single child
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Leaf nodes
# ---------------------------------------------------------------------------


class Symbol(BaseModel):
    """Reference to another rule by name."""

    type: Literal["SYMBOL"] = "SYMBOL"
    name: str = Field(min_length=1, description="Referenced rule name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class StringTerminal(BaseModel):
    """
    A terminal token.

    Both literal strings (``STRING``) and regex tokens (``PATTERN``) are
    terminals; they produce the same tree shape.
    """

    type: Literal["STRING", "PATTERN"] = "STRING"
    value: str = Field(description="Literal text or regex source")

    model_config = ConfigDict(frozen=True)

    @property
    def is_pattern(self) -> bool:
        return self.type == "PATTERN"

    def __str__(self) -> str:
        if self.is_pattern:
            return f"/{self.value}/"
        return f'"{self.value}"'


class Blank(BaseModel):
    """The empty production."""

    type: Literal["BLANK"] = "BLANK"

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return "blank()"


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


class Seq(BaseModel):
    """Ordered sequence: members matched one after another."""

    type: Literal["SEQ"] = "SEQ"
    members: list[Expression] = Field(min_length=1, description="Sequence members")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"seq({', '.join(str(m) for m in self.members)})"


class Choice(BaseModel):
    """Ordered alternation: exactly one member matches."""

    type: Literal["CHOICE"] = "CHOICE"
    members: list[Expression] = Field(min_length=1, description="Alternatives")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"choice({', '.join(str(m) for m in self.members)})"


class Repeat(BaseModel):
    """
    Repetition of a single child.

    ``REPEAT`` is zero-or-more and ``REPEAT1`` one-or-more. Both produce a
    list in the generated types.
    """

    type: Literal["REPEAT", "REPEAT1"] = "REPEAT"
    content: Expression

    model_config = ConfigDict(frozen=True)

    @property
    def at_least_one(self) -> bool:
        return self.type == "REPEAT1"

    def __str__(self) -> str:
        fn = "repeat1" if self.at_least_one else "repeat"
        return f"{fn}({self.content})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expression = Annotated[
    Union[Symbol, StringTerminal, Blank, Seq, Choice, Repeat],
    Field(discriminator="type"),
]

# Rebuild models for recursive forward references
Seq.model_rebuild()
Choice.model_rebuild()
Repeat.model_rebuild()


# ---------------------------------------------------------------------------
# Traversal and rewriting
# ---------------------------------------------------------------------------


def direct_children(expr: Expression) -> list[Expression]:
    """Return the immediate children of a node (empty for leaves)."""
    if isinstance(expr, (Seq, Choice)):
        return list(expr.members)
    if isinstance(expr, Repeat):
        return [expr.content]
    return []


def map_direct_children(
    expr: Expression, f: Callable[[Expression], Expression]
) -> Expression:
    """
    Apply ``f`` to each immediate child of ``expr`` and return a new node.

    Leaves (``Symbol``, ``StringTerminal``, ``Blank``) are returned unchanged.
    ``f`` is not applied recursively; callers decide whether to descend.
    """
    if isinstance(expr, (Seq, Choice)):
        return expr.model_copy(update={"members": [f(m) for m in expr.members]})
    if isinstance(expr, Repeat):
        return expr.model_copy(update={"content": f(expr.content)})
    return expr


def iter_symbols(expr: Expression) -> Iterator[str]:
    """Yield referenced rule names in pre-order, left to right."""
    if isinstance(expr, Symbol):
        yield expr.name
    for child in direct_children(expr):
        yield from iter_symbols(child)


def _contains_choice(expr: Expression) -> bool:
    if isinstance(expr, Choice):
        return True
    return any(_contains_choice(child) for child in direct_children(expr))


def contains_nested_choice(body: Expression) -> bool:
    """True if a ``Choice`` occurs anywhere below the top-level node."""
    return any(_contains_choice(child) for child in direct_children(body))
