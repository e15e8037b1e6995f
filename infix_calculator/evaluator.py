from typing import Protocol

from infix_calculator.errors import EvaluationError, StructuralError
from infix_calculator.expression_tree import Node, evaluate_tree
from infix_calculator.result import Result


class Evaluator(Protocol):
    """Turns an infix expression into a tree and a value.

    Strategies only implement ``try_to_expression_tree``; the value and the
    raising variant are derived from it.
    """

    def try_to_expression_tree(self, expression: str) -> Result[Node]: ...

    def try_evaluate(self, expression: str) -> Result[float]:
        tree = self.try_to_expression_tree(expression)
        if not tree:
            return Result.fail(tree.error)
        try:
            return Result.ok(evaluate_tree(tree.value))
        except RecursionError:
            return Result.fail(StructuralError("Expression is nested too deeply"))

    def evaluate(self, expression: str) -> float:
        result = self.try_evaluate(expression)
        if not result:
            raise EvaluationError(expression, result.error_message) from result.error
        return result.value
