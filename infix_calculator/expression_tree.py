"""Immutable expression tree shared by both evaluation strategies."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, List, Tuple, Union

import numpy as np

if TYPE_CHECKING:
    from infix_calculator.operators import Operator


@dataclass(frozen=True)
class Num:
    value: float

    def __iter__(self):
        return iter(())


@dataclass(frozen=True)
class Neg:
    child: "Node"

    def __iter__(self):
        yield self.child


@dataclass(frozen=True)
class BinOp:
    op: "Operator"
    left: "Node"
    right: "Node"

    def __iter__(self):
        yield self.left
        yield self.right


@dataclass(frozen=True)
class Call:
    name: str
    args: Tuple["Node", ...]
    # resolved once at build time; two calls with the same name and args are equal
    function: Callable[..., float] = field(compare=False, repr=False)

    def __iter__(self):
        return iter(self.args)


Node = Union[Num, Neg, BinOp, Call]

NODE_TYPES = (Num, Neg, BinOp, Call)


def fold_tree(node: Node, combine: Callable[[Node, List], Any]) -> Any:
    """Post-order fold with an explicit stack, so long chains like
    ``1 + 1 + ... + 1`` do not hit the interpreter's recursion limit.

    ``combine`` receives each node and the folded values of its children.
    """
    results: List = []
    stack = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if not isinstance(current, NODE_TYPES):
            raise TypeError(f"Unknown node: {current!r}")
        children = tuple(current)
        if expanded or not children:
            split = len(results) - len(children)
            values = results[split:]
            del results[split:]
            results.append(combine(current, values))
        else:
            stack.append((current, True))
            stack.extend((child, False) for child in reversed(children))
    return results[0]


def _evaluate_node(node, values):
    if isinstance(node, Num):
        return node.value
    if isinstance(node, Neg):
        return -values[0]
    if isinstance(node, BinOp):
        return node.op.operate(values)
    return node.function(*values)


def evaluate_tree(node: Node) -> float:
    return fold_tree(node, _evaluate_node)


def format_number(value: float) -> str:
    """Shortest text that reads back as ``value``, never in exponent notation."""
    return np.format_float_positional(value, trim="-")


def _infix_node(node, parts):
    if isinstance(node, Num):
        return format_number(node.value)
    if isinstance(node, Neg):
        return f"(-{parts[0]})"
    if isinstance(node, BinOp):
        return f"({parts[0]} {node.op.symbol} {parts[1]})"
    return f"{node.name}({', '.join(parts)})"


def to_infix(node: Node) -> str:
    """Fully parenthesized infix text; parsing it back gives the same value."""
    return fold_tree(node, _infix_node)


def _prefix_node(node, parts):
    if isinstance(node, Num):
        return format_number(node.value)
    if isinstance(node, Neg):
        return f"(neg {parts[0]})"
    if isinstance(node, BinOp):
        return f"({node.op.symbol} {parts[0]} {parts[1]})"
    return f"({' '.join([node.name.lower()] + parts)})"


def to_prefix(node: Node) -> str:
    return fold_tree(node, _prefix_node)


def tree_depth(node: Node) -> int:
    return fold_tree(node, lambda _, depths: 1 + max(depths) if depths else 0)
