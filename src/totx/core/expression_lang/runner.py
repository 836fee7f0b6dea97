"""
Source-to-value pipeline: scan, parse, evaluate.

Each stage fails fast; the first error stops the run.
"""

from __future__ import annotations

import logging

from totx.core.config import InterpreterConfig
from totx.core.expression_lang.interpreter import Interpreter
from totx.core.expression_lang.parser import parse, parse_script
from totx.core.expression_lang.scanner import scan
from totx.core.ir import Literal

logger = logging.getLogger(__name__)


def run_source(source: str, config: InterpreterConfig | None = None) -> Literal:
    """Evaluate ``source`` as a single expression.

    Raises:
        LexError, ParseError, EvaluationError: From the failing stage.
    """
    config = config or InterpreterConfig()
    tokens = scan(source)
    expr = parse(tokens, comma_operator=config.comma_operator, max_depth=config.max_depth)
    return Interpreter().evaluate(expr)


def run_script(source: str, config: InterpreterConfig | None = None) -> list[Literal]:
    """Evaluate ``source`` as ``;``-separated expressions, in order.

    Nothing is evaluated if the script has a syntax error; the first
    runtime error stops the remaining expressions.

    Raises:
        LexError: On the first lexical error.
        ParseErrors: With every syntax error in the script.
        EvaluationError: On the first runtime error.
    """
    config = config or InterpreterConfig()
    tokens = scan(source)
    exprs = parse_script(tokens, comma_operator=config.comma_operator, max_depth=config.max_depth)

    interpreter = Interpreter()
    results: list[Literal] = []
    for i, expr in enumerate(exprs, start=1):
        results.append(interpreter.evaluate(expr))
        logger.debug("Expression %d/%d -> %r", i, len(exprs), results[-1])
    return results
