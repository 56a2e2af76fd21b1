# Operator tables for the three grammatical roles a token can play.
#
# The roles share one alphabet: '!' is both prefix Not and postfix Factorial, '~' is both
# prefix BitwiseNot and infix NotEqual. Each role has its own classification function and the
# parser picks the role by position, never by the token alone.
#
# Higher precedence binds tighter.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, TypeVar

from climbcalc.errors import DivisionByZeroError, UnimplementedOperatorError
from climbcalc.tokens import OperatorToken, Token


def _truncating_div(lhs: int, rhs: int) -> int:
    """Integer division rounding toward zero, as fixed-width machine integers do."""
    if rhs == 0:
        raise DivisionByZeroError("Division by zero")
    quotient = abs(lhs) // abs(rhs)
    return quotient if (lhs < 0) == (rhs < 0) else -quotient


def _truncating_mod(lhs: int, rhs: int) -> int:
    """Remainder whose sign follows the dividend, paired with _truncating_div."""
    if rhs == 0:
        raise DivisionByZeroError("Modulo by zero")
    return lhs - rhs * _truncating_div(lhs, rhs)


def _factorial(value: int) -> int:
    raise UnimplementedOperatorError("Operator '!' (factorial) is not implemented")


@dataclass(frozen=True)
class PrefixOperator:
    name: str
    symbol: str
    precedence: int
    rule: Callable[[int], int] = field(repr=False, compare=False)

    def operate_on(self, value: int) -> int:
        return self.rule(value)


@dataclass(frozen=True)
class InfixOperator:
    name: str
    symbol: str
    precedence: int
    rule: Callable[[int, int], int] = field(repr=False, compare=False)
    left_associative: bool = True

    def is_left_associative(self) -> bool:
        return self.left_associative

    def operate_on(self, lhs: int, rhs: int) -> int:
        return self.rule(lhs, rhs)


@dataclass(frozen=True)
class PostfixOperator:
    name: str
    symbol: str
    precedence: int
    rule: Callable[[int], int] = field(repr=False, compare=False)

    def operate_on(self, value: int) -> int:
        return self.rule(value)


PREFIX_OPS: Dict[str, PrefixOperator] = {
    '+': PrefixOperator('Plus', '+', 10, lambda v: v),
    '-': PrefixOperator('Negative', '-', 10, lambda v: -v),
    '!': PrefixOperator('Not', '!', 10, lambda v: int(v == 0)),
    '~': PrefixOperator('BitwiseNot', '~', 10, lambda v: ~v),
}

# All infix operators are left-associative.
INFIX_OPS: Dict[str, InfixOperator] = {
    '*': InfixOperator('Multiply', '*', 7, lambda l, r: l * r),
    '/': InfixOperator('Divide', '/', 7, _truncating_div),
    '%': InfixOperator('Modulo', '%', 7, _truncating_mod),
    '+': InfixOperator('Add', '+', 6, lambda l, r: l + r),
    '-': InfixOperator('Subtract', '-', 6, lambda l, r: l - r),
    '<': InfixOperator('Less', '<', 5, lambda l, r: int(l < r)),
    '>': InfixOperator('Greater', '>', 5, lambda l, r: int(l > r)),
    '=': InfixOperator('Equal', '=', 4, lambda l, r: int(l == r)),
    '~': InfixOperator('NotEqual', '~', 4, lambda l, r: int(l != r)),
    '&': InfixOperator('And', '&', 3, lambda l, r: l & r),
    '|': InfixOperator('Or', '|', 3, lambda l, r: l | r),
}

POSTFIX_OPS: Dict[str, PostfixOperator] = {
    '!': PostfixOperator('Factorial', '!', 11, _factorial),
}


_Op = TypeVar("_Op")


def _classify(table: Dict[str, _Op], token: Token) -> Optional[_Op]:
    if isinstance(token, OperatorToken):
        return table.get(token.char)
    return None


def classify_prefix(token: Token) -> Optional[PrefixOperator]:
    return _classify(PREFIX_OPS, token)


def classify_infix(token: Token) -> Optional[InfixOperator]:
    return _classify(INFIX_OPS, token)


def classify_postfix(token: Token) -> Optional[PostfixOperator]:
    return _classify(POSTFIX_OPS, token)


def precedence_table() -> List[str]:
    """Describe every operator, tightest binding first, one line each."""
    rows = []
    for role, table in (('postfix', POSTFIX_OPS), ('prefix', PREFIX_OPS), ('infix', INFIX_OPS)):
        for op in table.values():
            rows.append((op.precedence, f"  {op.precedence:>2}  {role:<7} {op.symbol}  {op.name}"))
    rows.sort(key=lambda row: -row[0])
    return [line for _, line in rows]
