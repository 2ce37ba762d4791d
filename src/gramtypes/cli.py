"""
gramtypes CLI.

Usage:
    gramtypes path/to/grammar.json                  # print declarations
    gramtypes grammar.json -o types.re              # write to a file
    gramtypes grammar.json --config gramtypes.toml  # custom rendering options
"""

import logging
import platform
import sys
from pathlib import Path

import typer
from rich.console import Console

from gramtypes._version import get_version
from gramtypes.core.config import load_config
from gramtypes.core.errors import GramtypesError
from gramtypes.core.pipeline import generate_types_from_file

console = Console(stderr=True)

app = typer.Typer(
    help="Generate algebraic data type declarations from a tree-sitter grammar.json.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"gramtypes version {get_version()}")
        typer.echo(f"Python {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _print_error(error: GramtypesError) -> None:
    """Print a single diagnostic naming the error kind and location."""
    console.print(
        f"error[{error.kind}]: {error}",
        style="bold red",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


@app.command()
def generate(
    grammar: Path = typer.Argument(..., help="Path to the grammar.json file"),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML file with generator options",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write declarations to this file instead of stdout",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log pipeline details to stderr"),
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """
    Convert GRAMMAR into a recursive block of type declarations.

    Nested choices are hoisted into named rules, declarations are ordered
    from the root rule outwards, and extra rules come last.
    """
    _configure_logging(verbose)

    try:
        generator_config = load_config(config)
        text = generate_types_from_file(grammar, generator_config)
    except GramtypesError as e:
        _print_error(e)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(text, nl=False)
        return

    try:
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        console.print(f"error: cannot write {output}: {e}", style="bold red", markup=False)
        raise typer.Exit(code=1)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
