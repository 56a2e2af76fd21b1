# Lexical units produced by the Lexer and consumed by the Parser.
#
# Tokens are immutable values with no identity beyond their contents, so they compare structurally.
# str() gives the human-readable form used in error messages.

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    """Base token."""
    pass


@dataclass(frozen=True)
class NumberToken(Token):
    value: int

    def __str__(self) -> str:
        return f"Number({self.value})"


@dataclass(frozen=True)
class LeftParen(Token):
    def __str__(self) -> str:
        return "("


@dataclass(frozen=True)
class RightParen(Token):
    def __str__(self) -> str:
        return ")"


@dataclass(frozen=True)
class OperatorToken(Token):
    """Any single non-whitespace character that is not a digit or a parenthesis."""
    char: str

    def __str__(self) -> str:
        return f"Operator('{self.char}')"


@dataclass(frozen=True)
class EndOfInput(Token):
    def __str__(self) -> str:
        return "EndOfInput"


LEFT_PAREN = LeftParen()
RIGHT_PAREN = RightParen()
END_OF_INPUT = EndOfInput()
