"""
Expression tree types for the integer expression engine.

The parser builds these nodes and nothing mutates them afterwards:
every model is frozen and each node owns its children exclusively,
so a parsed expression is always a strict tree.

Supports:
- Integer literals: 42
- Binary operators: * / % + - << >> < > & ^ |
- Function calls: name(a, b) (representable, never evaluated)
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class Operator(StrEnum):
    """Binary operators, keyed by their source spelling."""

    # Multiplicative
    MUL = "*"
    DIV = "/"
    MOD = "%"
    # Additive
    ADD = "+"
    SUB = "-"
    # Shift
    SHR = ">>"
    SHL = "<<"
    # Comparison
    GT = ">"
    LT = "<"
    # Bitwise
    AND = "&"
    XOR = "^"
    OR = "|"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class NumberLiteral(BaseModel):
    """An integer literal together with the text it was parsed from."""

    value: int = Field(description="The literal value")
    text: str = Field(description="Source spelling of the literal")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.text


class BinaryOp(BaseModel):
    """Binary operation: left op right."""

    op: Operator
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


class FunctionCall(BaseModel):
    """
    Function call: name(arg1, arg2, ...).

    Part of the tree vocabulary only. The parser does not produce it and
    the evaluator rejects it with UnsupportedExpressionError.
    """

    name: str = Field(description="Function name")
    args: list[Expr] = Field(default_factory=list, description="Arguments")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.args)
        return f"{self.name}({args_str})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = NumberLiteral | BinaryOp | FunctionCall

# Rebuild models for recursive forward references
BinaryOp.model_rebuild()
FunctionCall.model_rebuild()
