# --------------------------
# Tokenizer / Lexer
# --------------------------

from __future__ import annotations

from climbcalc.errors import ParseError
from climbcalc.tokens import (
    END_OF_INPUT,
    LEFT_PAREN,
    RIGHT_PAREN,
    NumberToken,
    OperatorToken,
    Token,
)

_DIGITS = '0123456789'
_BLANKS = ' \t'


class Lexer:
    """One-token-lookahead tokenizer for calculator expressions.

    Produces NumberToken, LeftParen, RightParen, OperatorToken and EndOfInput.
    Only spaces and tabs are skipped; every other non-digit, non-paren character,
    including newlines, becomes an OperatorToken. Callers strip line endings first.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.len = len(text)
        self._current: Token = END_OF_INPUT
        self.advance()

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < self.len else ''

    def current(self) -> Token:
        """Return the token at the front of the stream without consuming it."""
        return self._current

    def take(self) -> Token:
        """Return the current token and advance beyond it."""
        tok = self._current
        self.advance()
        return tok

    def advance(self) -> None:
        """Scan the next token from the character cursor into the lookahead slot."""
        while self._peek() and self._peek() in _BLANKS:
            self.pos += 1
        ch = self._peek()
        if ch == '':
            self._current = END_OF_INPUT
            return
        self.pos += 1
        if ch in _DIGITS:
            value = int(ch)
            while self._peek() and self._peek() in _DIGITS:
                value = value * 10 + int(self._peek())
                self.pos += 1
            self._current = NumberToken(value)
        elif ch == '(':
            self._current = LEFT_PAREN
        elif ch == ')':
            self._current = RIGHT_PAREN
        else:
            self._current = OperatorToken(ch)

    def consume(self, expected_token: Token, label: str) -> None:
        """Advance past the current token, which must equal expected_token."""
        if self._current != expected_token:
            raise ParseError(label, self._current)
        self.advance()

