"""
Text rendering of type declarations.

All declarations form a single mutually recursive block:

    type program = list(program_0)
    and program_0 =
     | PROGRAM_0_CTOR_0 (assignment_statement)
     | PROGRAM_0_CTOR_1 (expression_statement)
    and comment = string
    ;
"""

from .config import GeneratorConfig
from .errors import InternalInvariantError
from .ir import Alias, ListType, NamedType, TupleShape, TupleType, TypeDecl, TypeExpr, TypeShape

TYPE_KEYWORD = "type"
AND_KEYWORD = "and"
TERMINATOR = ";"


def render_type_expr(expr: TypeExpr, config: GeneratorConfig) -> str:
    if isinstance(expr, NamedType):
        return expr.name
    if isinstance(expr, TupleType):
        return _render_tuple(expr.items, config)
    if isinstance(expr, ListType):
        return f"{config.output.list_type}({render_type_expr(expr.item, config)})"
    raise InternalInvariantError(f"unexpected type expression {type(expr).__name__}")


def _render_tuple(items: list[TypeExpr], config: GeneratorConfig) -> str:
    return "(" + ", ".join(render_type_expr(item, config) for item in items) + ")"


def render_shape(shape: TypeShape, config: GeneratorConfig) -> str:
    if isinstance(shape, Alias):
        return render_type_expr(shape.target, config)
    if isinstance(shape, TupleShape):
        return _render_tuple(shape.items, config)
    # Variant: one alternative per line
    return "".join(
        f"\n | {ctor.name} ({render_type_expr(ctor.payload, config)})"
        for ctor in shape.constructors
    )


def render_type_decl(decl: TypeDecl, config: GeneratorConfig) -> str:
    return f"{decl.name} = {render_shape(decl.shape, config)}"


def render_type_decls(decls: list[TypeDecl], config: GeneratorConfig | None = None) -> str:
    """
    Render declarations as one recursive block terminated by ``;``.

    The first declaration is introduced by ``type``, every following one by
    ``and``. The result ends with a newline.
    """
    if not decls:
        raise InternalInvariantError("no type declarations to render")

    config = config or GeneratorConfig()
    first, *rest = decls
    lines = [f"{TYPE_KEYWORD} {render_type_decl(first, config)}"]
    lines.extend(f"{AND_KEYWORD} {render_type_decl(decl, config)}" for decl in rest)
    lines.append(TERMINATOR)
    return "\n".join(lines) + "\n"
