"""Shared pytest fixtures for gramtypes tests."""

from pathlib import Path

import pytest

from gramtypes.core import ir
from gramtypes.core.loader import load_grammar
from tests.builders import choice, make_grammar, repeat, seq, string, sym


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def arithmetic_grammar_path(fixtures_dir: Path) -> Path:
    """Return path to the arithmetic sample grammar."""
    return fixtures_dir / "arithmetic" / "grammar.json"


@pytest.fixture
def arithmetic_grammar(arithmetic_grammar_path: Path) -> ir.Grammar:
    """Return the decoded arithmetic sample grammar."""
    return load_grammar(arithmetic_grammar_path)


@pytest.fixture
def arithmetic_expected(fixtures_dir: Path) -> str:
    """Return the expected declaration block for the arithmetic grammar."""
    return (fixtures_dir / "arithmetic" / "expected_types.txt").read_text(encoding="utf-8")


@pytest.fixture
def cyclic_grammar() -> ir.Grammar:
    """Two mutually recursive rules plus a leaf."""
    return make_grammar(
        [
            ("block", seq(string("{"), repeat(sym("statement")), string("}"))),
            ("statement", choice(sym("block"), sym("word"))),
            ("word", string("w")),
        ]
    )
