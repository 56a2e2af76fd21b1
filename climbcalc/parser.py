# --------------------------
# Parser (precedence climbing)
# --------------------------

from __future__ import annotations

from climbcalc.errors import ParseError
from climbcalc.expression import Expression, Infix, Number, Postfix, Prefix
from climbcalc.lexer import Lexer
from climbcalc.operators import classify_infix, classify_postfix, classify_prefix
from climbcalc.tokens import END_OF_INPUT, LEFT_PAREN, RIGHT_PAREN, NumberToken


class Parser:
    """Precedence-climbing parser producing an Expression tree from a Lexer.

    Each call to parse_expression carries a minimum precedence. Operators binding
    less tightly than that threshold are left in the stream so an enclosing call
    can claim them. For the right operand of "4 + ___", "5 * 6" is accepted whole,
    but in "5 - 6" only 5 is taken so that "4 + 5" is built before "-" is consumed.
    """

    def __init__(self, lexer: Lexer):
        self.lexer = lexer

    def parse(self) -> Expression:
        """Parse one whole expression; the stream must be exhausted afterwards.

        Nesting deeper than the interpreter stack allows (e.g. hundreds of "(" or
        stacked prefix operators) is reported as a ParseError.
        """
        try:
            node = self.parse_expression(0)
        except RecursionError:
            raise ParseError("shallower nesting", self.lexer.current()) from None
        tok = self.lexer.current()
        if tok != END_OF_INPUT:
            raise ParseError("end of input", tok)
        return node

    def parse_expression(self, min_precedence: int = 0) -> Expression:
        prefix = classify_prefix(self.lexer.current())
        if prefix is not None:
            self.lexer.advance()
            operand = self.parse_expression(prefix.precedence)
            left: Expression = Prefix(prefix, operand)
        else:
            left = self.parse_atomic()

        while True:
            cur = self.lexer.current()
            infix = classify_infix(cur)
            if infix is not None:
                if infix.precedence < min_precedence:
                    break
                self.lexer.advance()
                # Left-associative operators only accept tighter-binding operators on their right.
                rhs_min = infix.precedence + (1 if infix.is_left_associative() else 0)
                right = self.parse_expression(rhs_min)
                left = Infix(left, infix, right)
                continue
            postfix = classify_postfix(cur)
            if postfix is not None:
                if postfix.precedence < min_precedence:
                    break
                self.lexer.advance()
                left = Postfix(left, postfix)
                continue
            break
        return left

    def parse_atomic(self) -> Expression:
        """Parse a numeral or a parenthesized expression."""
        tok = self.lexer.take()
        if isinstance(tok, NumberToken):
            return Number(tok.value)
        if tok == LEFT_PAREN:
            node = self.parse_expression(0)
            self.lexer.consume(RIGHT_PAREN, ")")
            return node
        raise ParseError("expression", tok)


def parse(text: str) -> Expression:
    return Parser(Lexer(text)).parse()


def calculate(text: str) -> int:
    """Parse and evaluate one line of input."""
    return parse(text).evaluate()
