"""Infix arithmetic calculator core: tokenizer, shunting-yard conversion and
two interchangeable evaluators (postfix stack and recursive descent)."""

from infix_calculator.descent_evaluator import RecursiveDescentEvaluator
from infix_calculator.errors import CalculatorError, EvaluationError
from infix_calculator.result import Result
from infix_calculator.rpn_evaluator import ReversePolishEvaluator
