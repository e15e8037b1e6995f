"""Random expression trees for property tests.

The root is never a bare number. Below it a node becomes a number leaf when
the depth budget runs out or the leaf draw succeeds; otherwise it is a
function call (arity taken from the registry) or a binary operation.
``to_infix`` on the result gives text the evaluators read back to the same
value.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from infix_calculator.expression_tree import BinOp, Call, Node, Num
from infix_calculator.math_functions import function_arity, lookup_function
from infix_calculator.operators import BINARY_SYMBOLS, OPERATORS

FUNCTION_NAMES = (
    "pow",
    "abs",
    "max",
    "min",
    "floor",
    "ceiling",
    "cos",
    "sin",
    "tan",
    "atan",
    "atan2",
)
FRACTIONAL_LEAF_PROBABILITY = 0.25


@dataclass(frozen=True)
class GeneratorSettings:
    leaf_probability: float = 0.3
    function_probability: float = 0.2
    max_depth: int = 4


def random_leaf(rng: np.random.Generator) -> Num:
    if rng.random() < FRACTIONAL_LEAF_PROBABILITY:
        return Num(float(rng.random() * 10))
    return Num(float(rng.integers(1, 10)))


def generate(
    leaf_probability: float,
    function_probability: float,
    max_depth: int,
    rng: Optional[np.random.Generator] = None,
) -> Node:
    if rng is None:
        rng = np.random.default_rng()
    return _generate(leaf_probability, function_probability, max_depth, rng, True)


def _generate(leaf_probability, function_probability, depth, rng, is_root) -> Node:
    if not is_root and (depth <= 0 or rng.random() < leaf_probability):
        return random_leaf(rng)

    if rng.random() < function_probability:
        name = FUNCTION_NAMES[rng.integers(len(FUNCTION_NAMES))]
        arity = function_arity(name)
        args = tuple(
            _generate(leaf_probability, function_probability, depth - 1, rng, False)
            for _ in range(arity)
        )
        return Call(name, args, lookup_function(name, arity))

    left = _generate(leaf_probability, function_probability, depth - 1, rng, False)
    right = _generate(leaf_probability, function_probability, depth - 1, rng, False)
    symbol = BINARY_SYMBOLS[rng.integers(len(BINARY_SYMBOLS))]
    return BinOp(OPERATORS[symbol], left, right)


def generate_from(settings: GeneratorSettings, rng=None) -> Node:
    return generate(
        settings.leaf_probability,
        settings.function_probability,
        settings.max_depth,
        rng,
    )
