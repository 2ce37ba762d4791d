"""
Error types for grammar decoding, hoisting, ordering, and type generation.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class GramtypesError(Exception):
    """Base exception for all gramtypes errors."""

    kind = "Error"

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class DecodeError(GramtypesError):
    """
    Raised when the grammar document cannot be decoded.

    Examples:
    - Malformed JSON
    - Missing or empty ``rules`` object
    - Rule body with missing members or an unknown node type
    """

    kind = "DecodeError"


class UnknownRuleReferenceError(GramtypesError):
    """
    Raised when a symbol refers to a rule that does not exist.

    Examples:
    - ``SYMBOL`` naming an undefined rule
    - ``extras`` entry naming an undefined rule
    """

    kind = "UnknownRuleReference"


class UnsupportedConstructError(GramtypesError):
    """
    Raised when a grammar uses a DSL feature outside the modeled subset.

    Examples:
    - ``FIELD`` labels
    - ``PREC``/``PREC_LEFT``/``PREC_RIGHT``/``PREC_DYNAMIC`` annotations
    - ``ALIAS``/``TOKEN``/``IMMEDIATE_TOKEN`` wrappers
    - External scanner tokens
    - Extra rules that reference other rules
    """

    kind = "UnsupportedConstruct"


class InternalInvariantError(GramtypesError):
    """
    Raised when an internal invariant does not hold.

    This signals a defect in gramtypes rather than a problem with the input,
    e.g. a nested ``CHOICE`` surviving into type generation.
    """

    kind = "InternalInvariantViolation"


class ConfigError(GramtypesError):
    """Raised when a configuration file cannot be read or is invalid."""

    kind = "ConfigError"


@dataclass
class ErrorContext:
    """
    Location information for an error.

    Attributes:
        rule: Rule in which the error occurred
        construct: Grammar construct involved (e.g. ``FIELD``)
        source: Optional grammar file the rule came from
    """

    rule: str | None = None
    construct: str | None = None
    source: Path | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "grammar.json: rule 'expression' (FIELD)"
        """
        parts = []
        if self.source:
            parts.append(str(self.source))
        if self.rule:
            parts.append(f"rule '{self.rule}'")
        location = ": ".join(parts)
        if self.construct:
            location = f"{location} ({self.construct})" if location else f"({self.construct})"
        return location


def make_unsupported_error(
    construct: str,
    rule: str | None = None,
    source: Path | None = None,
    detail: str | None = None,
) -> UnsupportedConstructError:
    """
    Helper to create an UnsupportedConstructError with context.

    Args:
        construct: Name of the rejected construct
        rule: Optional enclosing rule name
        source: Optional grammar file
        detail: Optional message overriding the default

    Returns:
        UnsupportedConstructError with context attached
    """
    context = ErrorContext(rule=rule, construct=construct, source=source)
    message = detail or f"{construct} is not supported"
    return UnsupportedConstructError(message, context)


def make_unknown_rule_error(
    name: str,
    rule: str | None = None,
    source: Path | None = None,
) -> UnknownRuleReferenceError:
    """
    Helper to create an UnknownRuleReferenceError.

    Args:
        name: The symbol that could not be resolved
        rule: Optional rule containing the reference
        source: Optional grammar file

    Returns:
        UnknownRuleReferenceError with context if a location is known
    """
    message = f"reference to undefined rule '{name}'"
    if rule or source:
        return UnknownRuleReferenceError(message, ErrorContext(rule=rule, source=source))
    return UnknownRuleReferenceError(message)
