"""Interactive integer calculator built on a precedence-climbing parser."""

from climbcalc.errors import (
    CalculatorError,
    DivisionByZeroError,
    EvalError,
    ParseError,
    UnimplementedOperatorError,
)
from climbcalc.expression import Expression, Infix, Number, Postfix, Prefix
from climbcalc.lexer import Lexer
from climbcalc.parser import Parser, calculate, parse

__all__ = [
    "CalculatorError",
    "DivisionByZeroError",
    "EvalError",
    "Expression",
    "Infix",
    "Lexer",
    "Number",
    "ParseError",
    "Parser",
    "Postfix",
    "Prefix",
    "UnimplementedOperatorError",
    "calculate",
    "parse",
]
