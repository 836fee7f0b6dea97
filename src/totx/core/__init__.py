"""Core totx functionality: IR, scanner, parser, printers, interpreter, configuration."""

from . import ir
from .config import TotxConfig, find_config, load_config
from .errors import (
    ConfigError,
    ErrorContext,
    EvaluationError,
    LexError,
    ParseError,
    TotxError,
)
from .expression_lang import evaluate, parse, parse_script, run_script, run_source, scan

__all__ = [
    "ir",
    "TotxError",
    "LexError",
    "ParseError",
    "EvaluationError",
    "ConfigError",
    "ErrorContext",
    "TotxConfig",
    "find_config",
    "load_config",
    "scan",
    "parse",
    "parse_script",
    "evaluate",
    "run_source",
    "run_script",
]
