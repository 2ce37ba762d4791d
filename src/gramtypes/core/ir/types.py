"""
Generated type declaration IR.

A TypeDecl is the generation-time representation of one rule as a target
type declaration. Its shape is one of:

- Alias: ``name = <type expression>``
- TupleShape: ``name = (a, b, ...)``
- Variant: ``name = | CTOR_0 (a) | CTOR_1 (b) ...``
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Type expressions
# ---------------------------------------------------------------------------


class NamedType(BaseModel):
    """Reference to a named type: another rule or the primitive string type."""

    name: str

    model_config = ConfigDict(frozen=True)


class TupleType(BaseModel):
    """Anonymous product type."""

    items: list[TypeExpr] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


class ListType(BaseModel):
    """List of a single element type."""

    item: TypeExpr

    model_config = ConfigDict(frozen=True)


TypeExpr = Union[NamedType, TupleType, ListType]

TupleType.model_rebuild()
ListType.model_rebuild()


# ---------------------------------------------------------------------------
# Declaration shapes
# ---------------------------------------------------------------------------


class Alias(BaseModel):
    """Declaration equal to a single type expression."""

    target: TypeExpr

    model_config = ConfigDict(frozen=True)


class TupleShape(BaseModel):
    """Declaration of a product of its members."""

    items: list[TypeExpr] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


class Constructor(BaseModel):
    """One labeled alternative of a variant."""

    name: str
    payload: TypeExpr

    model_config = ConfigDict(frozen=True)


class Variant(BaseModel):
    """Tagged union; one constructor per alternative, in source order."""

    constructors: list[Constructor] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


TypeShape = Union[Alias, TupleShape, Variant]


class TypeDecl(BaseModel):
    """A named type declaration derived from one rule."""

    name: str
    shape: TypeShape

    model_config = ConfigDict(frozen=True)
