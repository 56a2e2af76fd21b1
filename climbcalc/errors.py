# --------------------------
# Exceptions
# --------------------------

from __future__ import annotations

from climbcalc.tokens import Token


class CalculatorError(Exception):
    """Base class for calculator errors."""
    pass


class ParseError(CalculatorError):
    """Raised when the token stream does not form an expression.

    Carries the static label of what was expected and the token found in its place.
    """

    def __init__(self, expected: str, token: Token):
        self.expected = expected
        self.token = token
        super().__init__(f"Expected {expected}, got {token}")


class EvalError(CalculatorError):
    """Raised for errors during evaluation of a parsed tree."""
    pass


class DivisionByZeroError(EvalError):
    pass


class UnimplementedOperatorError(EvalError):
    """Raised when an operator that parses has no evaluation rule."""
    pass
