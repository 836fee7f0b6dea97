"""
Project configuration loaded from totx.toml.

Example:

    [interpreter]
    max_depth = 48
    comma_operator = true

    [output]
    format = "value"

    [logging]
    level = "WARNING"
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from totx.core.errors import ConfigError

CONFIG_FILENAME = "totx.toml"

# Parsing recurses roughly a dozen frames per nesting level.
DEFAULT_MAX_DEPTH = 48
MAX_DEPTH_LIMIT = 64

OUTPUT_FORMATS = ("value", "paren", "rpn")


@dataclass
class InterpreterConfig:
    """Parser and evaluator settings."""

    max_depth: int = DEFAULT_MAX_DEPTH
    comma_operator: bool = True


@dataclass
class OutputConfig:
    """How the CLI renders a parsed expression."""

    format: str = "value"  # "value" | "paren" | "rpn"


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class TotxConfig:
    """
    Settings loaded from totx.toml.

    Every section is optional; a missing file yields the defaults.
    """

    interpreter: InterpreterConfig = field(default_factory=InterpreterConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    path: Path | None = None


def find_config(start: Path) -> Path | None:
    """Return the nearest totx.toml in ``start`` or one of its parents."""
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None) -> TotxConfig:
    """Load ``path``; ``None`` gives the defaults.

    Raises:
        ConfigError: If the file is not valid TOML or holds an invalid value.
    """
    if path is None:
        return TotxConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: {e}") from e

    interpreter_data = _section(data, "interpreter")
    output_data = _section(data, "output")
    logging_data = _section(data, "logging")

    interpreter = InterpreterConfig(
        max_depth=interpreter_data.get("max_depth", DEFAULT_MAX_DEPTH),
        comma_operator=interpreter_data.get("comma_operator", True),
    )
    output = OutputConfig(format=output_data.get("format", "value"))
    logging_config = LoggingConfig(level=str(logging_data.get("level", "WARNING")).upper())

    config = TotxConfig(
        interpreter=interpreter,
        output=output,
        logging=logging_config,
        path=path,
    )
    _validate(config)
    return config


def is_log_level(name: str) -> bool:
    """True when ``name`` (any case) is a registered logging level."""
    return isinstance(logging.getLevelName(name.upper()), int)


def _section(data: dict, name: str) -> dict:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table, got {section!r}")
    return section


def _validate(config: TotxConfig) -> None:
    max_depth = config.interpreter.max_depth
    if not isinstance(max_depth, int) or isinstance(max_depth, bool):
        raise ConfigError(f"interpreter.max_depth must be an integer, got {max_depth!r}")
    if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
        raise ConfigError(
            f"interpreter.max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}"
        )
    if not isinstance(config.interpreter.comma_operator, bool):
        raise ConfigError("interpreter.comma_operator must be true or false")
    if config.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"output.format must be one of {', '.join(OUTPUT_FORMATS)}, got {config.output.format!r}"
        )
    if not is_log_level(config.logging.level):
        raise ConfigError(f"logging.level is not a logging level: {config.logging.level!r}")
