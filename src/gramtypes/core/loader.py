"""
Grammar decoding from tree-sitter's ``grammar.json``.

Only the keys the pipeline needs are read:

- ``name``: grammar name
- ``rules``: rule name -> body, in declaration order (the first is the root)
- ``extras``: list of bodies; ``SYMBOL`` entries mark extra rules
- ``externals``: must be empty

Rule bodies are scanned for constructs outside the modeled subset before
being validated into IR expressions.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from .config import GeneratorConfig
from .errors import (
    DecodeError,
    ErrorContext,
    UnknownRuleReferenceError,
    make_unsupported_error,
)
from .ir import Expression, Grammar, Rule

logger = logging.getLogger(__name__)

SUPPORTED_NODE_TYPES = frozenset(
    {"SYMBOL", "STRING", "PATTERN", "BLANK", "SEQ", "CHOICE", "REPEAT", "REPEAT1"}
)
PRECEDENCE_NODE_TYPES = frozenset({"PREC", "PREC_LEFT", "PREC_RIGHT", "PREC_DYNAMIC"})
UNSUPPORTED_NODE_TYPES = (
    frozenset({"FIELD", "ALIAS", "TOKEN", "IMMEDIATE_TOKEN"}) | PRECEDENCE_NODE_TYPES
)

_expression_adapter: TypeAdapter[Expression] = TypeAdapter(Expression)


def _normalize_node(
    node: Any,
    rule: str,
    config: GeneratorConfig,
    source: Path | None,
) -> Any:
    """Reject unsupported constructs and unwrap precedence if configured."""
    context = ErrorContext(rule=rule, source=source)
    if not isinstance(node, dict):
        raise DecodeError(f"rule body node must be an object, got {type(node).__name__}", context)

    tag = node.get("type")
    if not isinstance(tag, str):
        raise DecodeError(f"node 'type' must be a string, got {tag!r}", context)

    if tag in PRECEDENCE_NODE_TYPES and config.grammar.strip_precedence:
        if "content" not in node:
            raise DecodeError(f"{tag} node without content", context)
        logger.warning("Stripping %s in rule '%s'", tag, rule)
        return _normalize_node(node["content"], rule, config, source)

    if tag in UNSUPPORTED_NODE_TYPES:
        raise make_unsupported_error(tag, rule, source)

    if tag not in SUPPORTED_NODE_TYPES:
        raise DecodeError(f"unknown node type {tag!r}", context)

    if tag in ("SEQ", "CHOICE"):
        members = node.get("members")
        if not isinstance(members, list):
            raise DecodeError(f"{tag} node requires a 'members' list", context)
        return {**node, "members": [_normalize_node(m, rule, config, source) for m in members]}

    if tag in ("REPEAT", "REPEAT1"):
        if "content" not in node:
            raise DecodeError(f"{tag} node without content", context)
        return {**node, "content": _normalize_node(node["content"], rule, config, source)}

    return node


def _format_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    message = first["msg"]
    return f"{location}: {message}" if location else message


def decode_rule_body(
    raw: Any,
    rule: str,
    config: GeneratorConfig | None = None,
    source: Path | None = None,
) -> Expression:
    """
    Decode one rule body into an IR expression.

    Raises:
        UnsupportedConstructError: If the body uses an unmodeled construct
        DecodeError: If the body is malformed
    """
    config = config or GeneratorConfig()
    normalized = _normalize_node(raw, rule, config, source)
    try:
        return _expression_adapter.validate_python(normalized)
    except ValidationError as e:
        raise DecodeError(
            f"invalid rule body: {_format_validation_error(e)}",
            ErrorContext(rule=rule, source=source),
        ) from e


def _extra_rule_names(raw_extras: Any, source: Path | None) -> list[str]:
    if not isinstance(raw_extras, list):
        raise DecodeError("'extras' must be a list", ErrorContext(source=source))

    names: list[str] = []
    for entry in raw_extras:
        if isinstance(entry, dict) and entry.get("type") == "SYMBOL":
            name = entry.get("name")
            if not isinstance(name, str) or not name:
                raise DecodeError("extras SYMBOL without a name", ErrorContext(source=source))
            if name not in names:
                names.append(name)
        else:
            # Inline extras (e.g. whitespace patterns) have no rule of their own
            logger.debug("Ignoring inline extra %r", entry)
    return names


def parse_grammar(
    document: str | dict[str, Any],
    config: GeneratorConfig | None = None,
    source: Path | None = None,
) -> Grammar:
    """
    Decode a grammar document (JSON text or already-decoded object).

    Args:
        document: ``grammar.json`` contents
        config: Generator configuration (defaults if omitted)
        source: Optional file path used in error messages

    Returns:
        Grammar with rules in declaration order; the first rule is the root

    Raises:
        DecodeError: If the document is malformed
        UnsupportedConstructError: If the grammar uses an unmodeled construct
        UnknownRuleReferenceError: If an extras entry names an undefined rule
    """
    config = config or GeneratorConfig()
    where = ErrorContext(source=source) if source else None

    if isinstance(document, str):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as e:
            raise DecodeError(f"invalid JSON: {e}", where) from e

    if not isinstance(document, dict):
        raise DecodeError("grammar document must be a JSON object", where)

    name = document.get("name")
    if not isinstance(name, str) or not name:
        raise DecodeError("grammar requires a non-empty 'name'", where)

    raw_rules = document.get("rules")
    if not isinstance(raw_rules, dict) or not raw_rules:
        raise DecodeError("grammar requires a non-empty 'rules' object", where)

    externals = document.get("externals") or []
    if externals:
        tokens = [e.get("name", "?") for e in externals if isinstance(e, dict)]
        raise make_unsupported_error(
            "externals",
            source=source,
            detail=f"external scanner tokens are not supported: {', '.join(tokens)}",
        )

    extra_names = _extra_rule_names(document.get("extras", []), source)
    for extra in extra_names:
        if extra not in raw_rules:
            raise UnknownRuleReferenceError(
                f"extras entry references undefined rule '{extra}'",
                ErrorContext(construct="extras", source=source),
            )

    rules = [
        Rule(
            name=rule_name,
            body=decode_rule_body(body, rule_name, config, source),
            is_extra=rule_name in extra_names,
        )
        for rule_name, body in raw_rules.items()
    ]

    grammar = Grammar.from_rules(name, rules, extras=extra_names)
    logger.info(
        "Loaded grammar '%s': %d rule(s), %d extra(s)",
        grammar.name,
        len(grammar.order),
        len(grammar.extras),
    )
    return grammar


def load_grammar(path: Path, config: GeneratorConfig | None = None) -> Grammar:
    """
    Load a grammar from a ``grammar.json`` file.

    Raises:
        DecodeError: If the file cannot be read or decoded
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DecodeError(f"Cannot read grammar file {path}: {e}") from e
    return parse_grammar(text, config, source=path)
