"""
Top-level entry points: text in, integer (or one error) out.

Usage:
    from exprengine import calculate, evaluate_source

    calculate("2 + 3 * 4")          # 14, raises ExpressionError on failure

    value, err = evaluate_source("1 / 0")
    # value is None, err is an ExpressionArithmeticError
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from exprengine.config import EngineSettings, get_settings
from exprengine.errors import ExpressionError
from exprengine.evaluator import evaluate
from exprengine.parser import parse

logger = logging.getLogger(__name__)


class Outcome(NamedTuple):
    """Result of evaluating one expression: exactly one field is set."""

    value: int | None
    error: ExpressionError | None

    @property
    def ok(self) -> bool:
        return self.error is None


def calculate(source: str, settings: EngineSettings | None = None) -> int:
    """Tokenize, parse, and evaluate ``source``.

    Lexical and syntax errors are raised before any evaluation happens.

    Raises:
        ExpressionError: The first (and only) failure of the pipeline.
    """
    settings = settings or get_settings()
    value = evaluate(parse(source, settings), settings)
    logger.debug("Evaluated %r to %d", source, value)
    return value


def evaluate_source(source: str, settings: EngineSettings | None = None) -> Outcome:
    """Evaluate ``source``, returning the value or the error instead of raising."""
    try:
        value = calculate(source, settings)
    except ExpressionError as e:
        logger.debug("Expression %r failed: %s", source, e.message)
        return Outcome(value=None, error=e)
    return Outcome(value=value, error=None)
