"""Operator table shared by the tokenizer, the converter and both evaluators.

Every operator knows how to reduce an operand stack twice over: ``operate``
pops floats and returns a float, ``build`` pops tree nodes and returns the
node for the operation. Operands are popped right first.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, List, Mapping

import numpy as np

from infix_calculator.expression_tree import BinOp, Neg
from infix_calculator.math_functions import as_float_function

if TYPE_CHECKING:
    from infix_calculator.expression_tree import Node
    from infix_calculator.tokenizer import Token

# Internal symbol for unary minus. It never appears in source text.
NEGATE_SYMBOL = "~"


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Operator:
    symbol: str
    precedence: int
    associativity: Associativity
    operate: Callable[[List[float]], float] = field(compare=False, repr=False)
    build: Callable[[List["Node"]], "Node"] = field(compare=False, repr=False)
    arity: int = 2


def _binary_operate(ufunc):
    apply = as_float_function(ufunc)

    def operate(operands: List[float]) -> float:
        rhs = operands.pop()
        return apply(operands.pop(), rhs)

    return operate


def _binary_build(symbol):
    def build(operands):
        rhs = operands.pop()
        return BinOp(OPERATORS[symbol], operands.pop(), rhs)

    return build


def _negate_operate(operands: List[float]) -> float:
    return -operands.pop()


def _negate_build(operands):
    return Neg(operands.pop())


def _binary(symbol, precedence, associativity, ufunc):
    return Operator(
        symbol,
        precedence,
        associativity,
        operate=_binary_operate(ufunc),
        build=_binary_build(symbol),
    )


OPERATORS: Mapping[str, Operator] = MappingProxyType(
    {
        op.symbol: op
        for op in (
            _binary("+", 2, Associativity.LEFT, np.add),
            _binary("-", 2, Associativity.LEFT, np.subtract),
            _binary("*", 3, Associativity.LEFT, np.multiply),
            _binary("/", 3, Associativity.LEFT, np.divide),
            # truncated remainder, sign follows the dividend
            _binary("%", 3, Associativity.LEFT, np.fmod),
            _binary("^", 4, Associativity.RIGHT, np.power),
            Operator(
                NEGATE_SYMBOL,
                5,
                Associativity.RIGHT,
                operate=_negate_operate,
                build=_negate_build,
                arity=1,
            ),
        )
    }
)

# Characters that start an operator token in source text.
OPERATOR_CHARACTERS = frozenset(s for s in OPERATORS if s != NEGATE_SYMBOL)

BINARY_SYMBOLS = ("+", "-", "*", "/", "%", "^")


def operator_for(token: "Token") -> Operator:
    if token.operator_symbol is None:
        raise ValueError(f"The token {token} must be an operator")
    return OPERATORS[token.operator_symbol]
