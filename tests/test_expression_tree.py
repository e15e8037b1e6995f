import math

import pytest

from infix_calculator.expression_tree import (
    BinOp,
    Call,
    Neg,
    Num,
    evaluate_tree,
    fold_tree,
    format_number,
    to_infix,
    to_prefix,
    tree_depth,
)
from infix_calculator.math_functions import lookup_function
from infix_calculator.operators import OPERATORS


@pytest.fixture
def sample_tree():
    # max(-(1 + 2) * 3, 0.5)
    product = BinOp(
        OPERATORS["*"],
        Neg(BinOp(OPERATORS["+"], Num(1.0), Num(2.0))),
        Num(3.0),
    )
    return Call("max", (product, Num(0.5)), lookup_function("max", 2))


class TestEvaluateTree:
    def test_evaluates_recursively(self, sample_tree):
        assert evaluate_tree(sample_tree) == 0.5

    def test_leaf(self):
        assert evaluate_tree(Num(2.5)) == 2.5

    def test_unknown_node(self):
        with pytest.raises(TypeError):
            evaluate_tree("1 + 2")


class TestRendering:
    def test_to_infix_parenthesizes_every_operation(self, sample_tree):
        assert to_infix(sample_tree) == "max(((-(1 + 2)) * 3), 0.5)"

    def test_to_prefix(self, sample_tree):
        assert to_prefix(sample_tree) == "(max (* (neg (+ 1 2)) 3) 0.5)"

    @pytest.mark.parametrize(
        "value, text",
        [
            (3.0, "3"),
            (0.0, "0"),
            (0.1, "0.1"),
            (2.5e-7, "0.00000025"),
            (1e20, "100000000000000000000"),
            (12.375, "12.375"),
        ],
    )
    def test_format_number_never_uses_exponents(self, value, text):
        assert format_number(value) == text
        assert float(text) == value


class TestShape:
    def test_depth(self, sample_tree):
        assert tree_depth(Num(1.0)) == 0
        assert tree_depth(sample_tree) == 4

    def test_nodes_are_immutable(self):
        node = Num(1.0)
        with pytest.raises(AttributeError):
            node.value = 2.0

    def test_calls_compare_without_function(self):
        first = Call("abs", (Num(1.0),), lookup_function("abs", 1))
        second = Call("abs", (Num(1.0),), math.fabs)
        assert first == second


@pytest.fixture
def long_chain():
    # 1 + 1 + ... + 1, left-deep
    node = Num(1.0)
    for _ in range(3000):
        node = BinOp(OPERATORS["+"], node, Num(1.0))
    return node


class TestDeepTrees:
    def test_evaluate_long_chain(self, long_chain):
        assert evaluate_tree(long_chain) == 3001.0

    def test_render_long_chain(self, long_chain):
        assert to_infix(long_chain).startswith("(" * 3000 + "1 + 1)")
        assert to_prefix(long_chain).endswith("1 1) 1) 1)")

    def test_depth_long_chain(self, long_chain):
        assert tree_depth(long_chain) == 3000

    def test_negate_chain(self):
        node = Num(2.0)
        for _ in range(2001):
            node = Neg(node)
        assert evaluate_tree(node) == -2.0

    def test_fold_tree_visits_children_in_order(self, sample_tree):
        def collect(node, children):
            if isinstance(node, Num):
                return [node.value]
            return [leaf for child in children for leaf in child]

        assert fold_tree(sample_tree, collect) == [1.0, 2.0, 3.0, 0.5]
