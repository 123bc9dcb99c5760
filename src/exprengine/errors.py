"""
Error types for expression tokenizing, parsing, and evaluation.
"""


class ExpressionError(Exception):
    """Base exception for all expression engine errors."""

    def __init__(self, message: str, source: str | None = None, offset: int | None = None):
        self.message = message
        self.source = source
        self.offset = offset
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with the source diagnostic if available."""
        if self.source is not None and self.offset is not None:
            return f"{self.message}\n{format_error_position(self.source, self.offset)}"
        return self.message


class LexError(ExpressionError):
    """
    Raised when the source text cannot be split into tokens.

    Examples:
    - Characters outside the expression alphabet ($, =, !)
    """

    pass


class EmptyInputError(ExpressionError):
    """Raised when the source text contains no tokens at all."""

    pass


class ExpressionSyntaxError(ExpressionError):
    """
    Raised when the token sequence does not form an expression.

    Examples:
    - Unexpected token where an operand was expected
    - Unmatched or missing closing parenthesis
    - A comma outside any argument list
    - Tokens left over after a complete expression
    - Literals that are not 64-bit integers
    """

    pass


class NestingDepthError(ExpressionError):
    """Raised when an expression nests deeper than the configured limit."""

    pass


class ExpressionArithmeticError(ExpressionError, ArithmeticError):
    """
    Raised when evaluation hits an undefined integer operation.

    Examples:
    - Division by zero
    - Modulo by zero
    - Negative shift count
    """

    pass


class UnsupportedExpressionError(ExpressionError):
    """Raised when the evaluator meets a node it has no rule for (function calls)."""

    pass


def format_error_position(source: str, offset: int) -> str:
    """
    Render a framed diagnostic pointing at ``offset`` in ``source``.

    The frame is a dash rule as long as the source, the source itself,
    a caret under the offending position, and the dash rule again:

        ----
        2+(3
            ^
        ----

    Args:
        source: Full expression text
        offset: Character offset of the error (may equal len(source) for EOF)

    Returns:
        The four-line diagnostic, each line newline-terminated
    """
    rule = "-" * len(source) + "\n"
    return rule + source + "\n" + " " * offset + "^\n" + rule
