"""
Integer expression engine.

Tokenizer, precedence-climbing parser, and tree-walking evaluator for
arithmetic expressions such as ``(2 + 3) * 4`` or ``1 << 4 | 3``.

Usage:
    from exprengine import calculate, evaluate_source, parse

    calculate("2 + 3 * 4")  # 14

    value, err = evaluate_source("8 / (2 - 2)")
    # value is None, err is an ExpressionArithmeticError

    str(parse("-5 + 3"))  # "((0 - 5) + 3)"
"""

from exprengine.config import EngineSettings, get_settings
from exprengine.engine import Outcome, calculate, evaluate_source
from exprengine.errors import (
    EmptyInputError,
    ExpressionArithmeticError,
    ExpressionError,
    ExpressionSyntaxError,
    LexError,
    NestingDepthError,
    UnsupportedExpressionError,
    format_error_position,
)
from exprengine.evaluator import evaluate
from exprengine.parser import build, parse
from exprengine.tokenizer import tokenize

__all__ = [
    "EmptyInputError",
    "EngineSettings",
    "ExpressionArithmeticError",
    "ExpressionError",
    "ExpressionSyntaxError",
    "LexError",
    "NestingDepthError",
    "Outcome",
    "UnsupportedExpressionError",
    "build",
    "calculate",
    "evaluate",
    "evaluate_source",
    "format_error_position",
    "get_settings",
    "parse",
    "tokenize",
]
