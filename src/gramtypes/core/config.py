"""
Generator configuration loaded from a TOML file.

Example ``gramtypes.toml``:

    [grammar]
    strip_precedence = false

    [output]
    primitive_type = "string"
    list_type = "list"
    constructor_infix = "_CTOR_"

Every key is optional; missing keys take the defaults below.
"""

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from .errors import ConfigError


@dataclass
class GrammarConfig:
    """Grammar decoding options."""

    strip_precedence: bool = False  # unwrap PREC* nodes instead of rejecting them


@dataclass
class OutputConfig:
    """Rendering options for generated declarations."""

    primitive_type: str = "string"  # type of STRING / PATTERN / BLANK
    list_type: str = "list"  # type constructor for REPEAT
    constructor_infix: str = "_CTOR_"  # between upper-cased rule name and index


@dataclass
class GeneratorConfig:
    """Complete generator configuration."""

    grammar: GrammarConfig = field(default_factory=GrammarConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def _build_section(cls: type, data: Any, section: str, source: Path | None) -> Any:
    where = f"{source}: " if source else ""
    if not isinstance(data, dict):
        raise ConfigError(f"{where}[{section}] must be a table")

    defaults = cls()
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"{where}unknown key(s) in [{section}]: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for name, value in data.items():
        expected = type(getattr(defaults, name))
        if type(value) is not expected:
            raise ConfigError(
                f"{where}[{section}].{name} must be of type {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        if expected is str and not value:
            raise ConfigError(f"{where}[{section}].{name} must not be empty")
        values[name] = value
    return cls(**values)


def parse_config(data: dict[str, Any], source: Path | None = None) -> GeneratorConfig:
    """
    Build a GeneratorConfig from decoded TOML data.

    Raises:
        ConfigError: On unknown sections or keys, or wrongly typed values
    """
    sections = {"grammar": GrammarConfig, "output": OutputConfig}
    unknown = sorted(set(data) - set(sections))
    if unknown:
        where = f"{source}: " if source else ""
        raise ConfigError(f"{where}unknown section(s): {', '.join(unknown)}")

    return GeneratorConfig(
        grammar=_build_section(GrammarConfig, data.get("grammar", {}), "grammar", source),
        output=_build_section(OutputConfig, data.get("output", {}), "output", source),
    )


def load_config(path: Path | None = None) -> GeneratorConfig:
    """
    Load configuration from a TOML file, or return defaults if no path given.

    Raises:
        ConfigError: If the file cannot be read or is invalid
    """
    if path is None:
        return GeneratorConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    return parse_config(data, source=path)
