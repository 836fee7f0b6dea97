"""
totx - a small expression language.

Scans, parses, and evaluates expressions built from literals, grouping,
unary, and binary operators.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import EvaluationError, LexError, ParseError, TotxError
from .core.expression_lang import run_script, run_source

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "TotxError",
    "LexError",
    "ParseError",
    "EvaluationError",
    "run_source",
    "run_script",
]
