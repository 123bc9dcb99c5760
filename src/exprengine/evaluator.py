"""
Expression evaluator for the integer expression engine.

Reduces a parsed tree to a single integer. Pure evaluation: no I/O, no
side effects, and no use of Python's eval().

Integers follow signed 64-bit semantics: results wrap on overflow,
division truncates toward zero, and the remainder takes the sign of the
dividend.
"""

from __future__ import annotations

from exprengine.config import EngineSettings, get_settings
from exprengine.errors import (
    ExpressionArithmeticError,
    ExpressionError,
    NestingDepthError,
    UnsupportedExpressionError,
)
from exprengine.ir import BinaryOp, Expr, FunctionCall, NumberLiteral, Operator

_INT64_BITS = 64
_INT64_MODULUS = 1 << _INT64_BITS
_INT64_MIN = -(1 << (_INT64_BITS - 1))


def evaluate(expr: Expr, settings: EngineSettings | None = None) -> int:
    """Evaluate an expression tree to an integer.

    Args:
        expr: Parsed expression tree.
        settings: Limits to apply; defaults to ``get_settings()``

    Returns:
        The computed value.

    Raises:
        ExpressionArithmeticError: On division or modulo by zero, or a
            negative shift count.
        NestingDepthError: If the tree is deeper than ``max_tree_depth``.
        UnsupportedExpressionError: If the tree contains a function call.
    """
    settings = settings or get_settings()
    return _interpret(expr, 1, settings.max_tree_depth)


def _interpret(expr: Expr, depth: int, limit: int) -> int:
    """Dispatch evaluation to the appropriate handler."""
    if depth > limit:
        raise NestingDepthError(f"expression tree too deep (limit {limit})")

    if isinstance(expr, NumberLiteral):
        return expr.value

    if isinstance(expr, BinaryOp):
        return _interpret_binary(expr, depth, limit)

    if isinstance(expr, FunctionCall):
        raise UnsupportedExpressionError(f"function calls are not supported: {expr.name}()")

    raise ExpressionError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_binary(expr: BinaryOp, depth: int, limit: int) -> int:
    """Evaluate both operands, then apply the operator."""
    left = _interpret(expr.left, depth + 1, limit)
    right = _interpret(expr.right, depth + 1, limit)
    op = expr.op

    # Arithmetic
    if op == Operator.ADD:
        return _wrap(left + right)
    if op == Operator.SUB:
        return _wrap(left - right)
    if op == Operator.MUL:
        return _wrap(left * right)
    if op == Operator.DIV:
        if right == 0:
            raise ExpressionArithmeticError(f"division by zero: [{left}/{right}]")
        return _wrap(_trunc_div(left, right))
    if op == Operator.MOD:
        if right == 0:
            raise ExpressionArithmeticError(f"modulo by zero: [{left}%{right}]")
        return _wrap(left - right * _trunc_div(left, right))

    # Shift
    if op in (Operator.SHL, Operator.SHR):
        if right < 0:
            raise ExpressionArithmeticError(f"negative shift count: [{left}{op.value}{right}]")
        if op == Operator.SHL:
            return 0 if right >= _INT64_BITS else _wrap(left << right)
        return left >> min(right, _INT64_BITS - 1)

    # Comparison
    if op == Operator.GT:
        return 1 if left > right else 0
    if op == Operator.LT:
        return 1 if left < right else 0

    # Bitwise
    if op == Operator.AND:
        return left & right
    if op == Operator.XOR:
        return left ^ right
    if op == Operator.OR:
        return left | right

    raise ExpressionError(f"Unknown binary op: {op}")


def _trunc_div(left: int, right: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient


def _wrap(value: int) -> int:
    """Reduce to signed 64-bit two's complement."""
    return (value - _INT64_MIN) % _INT64_MODULUS + _INT64_MIN
