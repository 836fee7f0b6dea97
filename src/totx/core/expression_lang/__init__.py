"""
totx expression language.

Scanner, parser, printers, and evaluator for the expression pipeline.

Usage:
    from totx.core.expression_lang import parse, scan, evaluate

    expr = parse(scan("(10 + 2) / 2"))
    result = evaluate(expr)
    # result == Literal.number(6)
"""

from totx.core.expression_lang.interpreter import Interpreter, evaluate
from totx.core.expression_lang.parser import Parser, parse, parse_script
from totx.core.expression_lang.printer import to_parenthesized, to_rpn
from totx.core.expression_lang.runner import run_script, run_source
from totx.core.expression_lang.scanner import Scanner, scan

__all__ = [
    "Interpreter",
    "Parser",
    "Scanner",
    "evaluate",
    "parse",
    "parse_script",
    "run_script",
    "run_source",
    "scan",
    "to_parenthesized",
    "to_rpn",
]
