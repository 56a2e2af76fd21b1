# --------------------------
# AST Nodes
# --------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Tuple

from climbcalc.operators import InfixOperator, PostfixOperator, PrefixOperator


@dataclass(frozen=True)
class Expression:
    """Base AST node. Trees are built bottom-up by the parser and never mutated.

    Evaluation and rendering walk the tree with an explicit stack, so a long
    chain such as 1+1+...+1 does not hit the interpreter's recursion limit.
    """

    def children(self) -> Tuple[Expression, ...]:
        return ()

    def apply(self, *operands: int) -> int:
        raise NotImplementedError

    def render(self, *operands: str) -> str:
        raise NotImplementedError

    def _fold(self, combine: Callable[..., Any]) -> Any:
        # Post-order walk; children are finished left to right before their parent.
        results: List[Any] = []
        stack: List[Tuple[Expression, bool]] = [(self, False)]
        while stack:
            node, expanded = stack.pop()
            children = node.children()
            if children and not expanded:
                stack.append((node, True))
                stack.extend((child, False) for child in reversed(children))
                continue
            args: List[Any] = []
            if children:
                args = results[-len(children):]
                del results[-len(children):]
            results.append(combine(node, args))
        return results[0]

    def evaluate(self) -> int:
        # Both sides of an infix node are always evaluated, left first; nothing short-circuits.
        return self._fold(lambda node, args: node.apply(*args))

    def __str__(self) -> str:
        return self._fold(lambda node, args: node.render(*args))


@dataclass(frozen=True)
class Number(Expression):
    value: int

    def apply(self) -> int:
        return self.value

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Prefix(Expression):
    op: PrefixOperator
    operand: Expression

    def children(self) -> Tuple[Expression, ...]:
        return (self.operand,)

    def apply(self, value: int) -> int:
        return self.op.operate_on(value)

    def render(self, operand: str) -> str:
        return f"({self.op.symbol}{operand})"


@dataclass(frozen=True)
class Infix(Expression):
    left: Expression
    op: InfixOperator
    right: Expression

    def children(self) -> Tuple[Expression, ...]:
        return (self.left, self.right)

    def apply(self, lhs: int, rhs: int) -> int:
        return self.op.operate_on(lhs, rhs)

    def render(self, lhs: str, rhs: str) -> str:
        return f"({lhs} {self.op.symbol} {rhs})"


@dataclass(frozen=True)
class Postfix(Expression):
    operand: Expression
    op: PostfixOperator

    def children(self) -> Tuple[Expression, ...]:
        return (self.operand,)

    def apply(self, value: int) -> int:
        return self.op.operate_on(value)

    def render(self, operand: str) -> str:
        return f"({operand}{self.op.symbol})"

