"""
Precedence-climbing parser for the integer expression engine.

Grammar:
    expr     → primary (binop primary)*
    primary  → INT | "(" expr ")" | "-" primary

Binary operators are folded by binding power (higher binds tighter):

    * / %   100
    + -      90
    >> <<    80
    > <      70
    &        60
    ^        50
    |        40

Equal binding powers associate to the left. Unary minus is desugared to
subtraction from zero, so ``-x`` parses as ``(0 - x)``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from exprengine.config import EngineSettings, get_settings
from exprengine.errors import EmptyInputError, ExpressionSyntaxError, NestingDepthError
from exprengine.ir import BinaryOp, Expr, NumberLiteral, Operator
from exprengine.tokenizer import Token, TokenCategory, tokenize

BINDING_POWER: dict[Operator, int] = {
    Operator.MUL: 100,
    Operator.DIV: 100,
    Operator.MOD: 100,
    Operator.ADD: 90,
    Operator.SUB: 90,
    Operator.SHR: 80,
    Operator.SHL: 80,
    Operator.GT: 70,
    Operator.LT: 70,
    Operator.AND: 60,
    Operator.XOR: 50,
    Operator.OR: 40,
}

INT64_MAX = (1 << 63) - 1


class _Parser:
    """Single-use recursive descent parser over one token sequence."""

    def __init__(self, tokens: list[Token], source: str, max_depth: int) -> None:
        self.tokens = tokens
        self.source = source
        self.max_depth = max_depth
        self.pos = 0
        self.depth = 0

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def error(self, message: str, offset: int) -> ExpressionSyntaxError:
        return ExpressionSyntaxError(message, self.source, offset)

    def eof_error(self, message: str) -> ExpressionSyntaxError:
        return self.error(message, len(self.source))

    @contextmanager
    def nested(self, opener: Token) -> Iterator[None]:
        """Track one level of nesting opened by ``opener``."""
        if self.depth >= self.max_depth:
            raise NestingDepthError(
                f"expression nested too deeply (limit {self.max_depth})",
                self.source,
                opener.offset,
            )
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def binding_power(self) -> int:
        """Binding power of the current token, -1 if it is not a binary operator."""
        tok = self.current
        if tok is None or tok.category != TokenCategory.OPERATOR:
            return -1
        try:
            return BINDING_POWER[Operator(tok.text)]
        except ValueError:
            return -1

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        """primary (binop primary)*"""
        lhs = self.parse_primary()
        return self.parse_bin_op_rhs(0, lhs)

    def parse_primary(self) -> Expr:
        """INT | '(' expr ')' | '-' primary"""
        tok = self.current
        if tok is None:
            raise self.eof_error("want '(' or '0-9' but get EOF")

        if tok.category == TokenCategory.LITERAL:
            return self._parse_number()

        if tok.category == TokenCategory.COMMA:
            raise self.error(f"want '(' or '0-9' but get {tok.text}", tok.offset)

        # Parenthesized expression
        if tok.text == "(":
            self.advance()
            if self.at_end:
                raise self.eof_error("want '(' or '0-9' but get EOF")
            with self.nested(tok):
                expr = self.parse_expression()
            closing = self.current
            if closing is None:
                raise self.eof_error("want ')' but get EOF")
            if closing.text != ")":
                raise self.error(f"want ')' but get '{closing.text}'", closing.offset)
            self.advance()
            return expr

        # Unary minus: -x → (0 - x)
        if tok.text == "-":
            self.advance()
            if self.at_end:
                raise self.error("want '0-9' but get '-'", tok.offset)
            with self.nested(tok):
                operand = self.parse_primary()
            return BinaryOp(
                op=Operator.SUB,
                left=NumberLiteral(value=0, text="0"),
                right=operand,
            )

        raise self.error(f"want '(' or '0-9' but get '{tok.text}'", tok.offset)

    def parse_bin_op_rhs(self, min_power: int, lhs: Expr) -> Expr:
        """Fold operators binding at least ``min_power`` onto ``lhs``."""
        while True:
            power = self.binding_power()
            if power < min_power:
                return lhs

            op = Operator(self.advance().text)
            if self.at_end:
                raise self.eof_error("want '(' or '0-9' but get EOF")
            rhs = self.parse_primary()

            # The next operator binds tighter: it takes rhs as its left operand
            if power < self.binding_power():
                rhs = self.parse_bin_op_rhs(power + 1, rhs)

            lhs = BinaryOp(op=op, left=lhs, right=rhs)

    def _parse_number(self) -> NumberLiteral:
        tok = self.current
        assert tok is not None
        value = _parse_int64(tok.text)
        if value is None:
            raise self.error(f"want '(' or '0-9' but get '{tok.text}'", tok.offset)
        self.advance()
        return NumberLiteral(value=value, text=tok.text)


def _parse_int64(text: str) -> int | None:
    """Parse a base-10 literal, None unless it is a 64-bit signed integer."""
    if not text.isascii() or not text.isdigit():
        return None
    value = int(text)
    if value > INT64_MAX:
        return None
    return value


def build(tokens: list[Token], source: str, settings: EngineSettings | None = None) -> Expr:
    """Build an expression tree from a token sequence.

    Args:
        tokens: Tokens produced by ``tokenize(source)``
        source: The text the tokens came from, used for diagnostics
        settings: Limits to apply; defaults to ``get_settings()``

    Returns:
        The root of the parsed expression tree.

    Raises:
        EmptyInputError: If ``tokens`` is empty.
        ExpressionSyntaxError: If the tokens do not form one expression.
        NestingDepthError: If nesting exceeds ``settings.max_depth``.
    """
    if not tokens:
        raise EmptyInputError("empty expression", source, 0)

    settings = settings or get_settings()
    parser = _Parser(tokens, source, settings.max_depth)
    expr = parser.parse_expression()

    # Ensure all tokens consumed
    leftover = parser.current
    if leftover is not None:
        raise ExpressionSyntaxError(
            "bad expression, reaching the end or missing the operator",
            source,
            leftover.offset,
        )

    return expr


def parse(source: str, settings: EngineSettings | None = None) -> Expr:
    """Parse an expression string into a tree.

    Args:
        source: Expression string (e.g., "2 + 3 * 4")

    Returns:
        Parsed expression tree.

    Raises:
        LexError: If tokenization fails.
        EmptyInputError: If the source holds no tokens.
        ExpressionSyntaxError: If the expression is invalid.
        NestingDepthError: If nesting exceeds the configured limit.
    """
    return build(tokenize(source), source, settings)
