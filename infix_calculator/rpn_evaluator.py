"""Evaluator built on the shunting-yard postfix output.

Postfix tokens are folded over a stack: numbers push a leaf, operators and
functions pop their operands and push the node that combines them. The tree
is not strictly needed to get a number, ``calculate_postfix`` folds the same
tokens straight into floats.
"""

import logging
from typing import List, Sequence

from infix_calculator.errors import (
    ArgumentCountError,
    InvalidNumberError,
    StructuralError,
)
from infix_calculator.evaluator import Evaluator
from infix_calculator.expression_tree import (
    Call,
    Node,
    Num,
    format_number,
    to_infix,
)
from infix_calculator.math_functions import lookup_function, unknown_function_error
from infix_calculator.operators import operator_for
from infix_calculator.result import Result
from infix_calculator.shunting_yard import infix_to_postfix_tokens
from infix_calculator.tokenizer import Token, TokenKind

logger = logging.getLogger(__name__)


def _parse_number(token: Token) -> Result[float]:
    try:
        return Result.ok(float(token.source_slice))
    except ValueError:
        return Result.fail(InvalidNumberError(f"Invalid number literal {token}"))


def _missing_operands(expression: str, token: Token) -> ArgumentCountError:
    return ArgumentCountError(
        f"Invalid expression '{expression}'. "
        f"Missing one or more operands near token {token}"
    )


def _pop_arguments(token: Token, stack: list) -> Result[list]:
    arg_count = token.arg_count or 0
    if arg_count > len(stack):
        return Result.fail(
            ArgumentCountError(
                f"Not enough arguments for function '{token.source_slice}' "
                f"at index {token.index}"
            )
        )
    args = [stack.pop() for _ in range(arg_count)]
    args.reverse()
    return Result.ok(args)


def _build_call(token: Token, stack: List[Node]) -> Result[Node]:
    args = _pop_arguments(token, stack)
    if not args:
        return Result.fail(args.error)

    name = token.source_slice
    function = lookup_function(name, len(args.value))
    if function is None:
        rendered = [to_infix(arg) for arg in args.value]
        return Result.fail(unknown_function_error(name, rendered))
    return Result.ok(Call(name, tuple(args.value), function))


def build_tree(postfix: Sequence[Token], expression: str = "") -> Result[Node]:
    stack: List[Node] = []
    for token in postfix:
        if token.kind is TokenKind.NUMBER:
            value = _parse_number(token)
            if not value:
                return Result.fail(value.error)
            stack.append(Num(value.value))
        elif token.kind is TokenKind.OPERATOR:
            op = operator_for(token)
            if len(stack) < op.arity:
                return Result.fail(_missing_operands(expression, token))
            stack.append(op.build(stack))
        elif token.kind is TokenKind.FUNCTION:
            call = _build_call(token, stack)
            if not call:
                return call
            stack.append(call.value)
        else:
            return Result.fail(
                StructuralError(f"Unexpected token {token} found in RPN expression.")
            )

    if len(stack) != 1:
        return Result.fail(StructuralError(f"Invalid expression '{expression}'"))
    return Result.ok(stack[0])


def calculate_postfix(postfix: Sequence[Token], expression: str = "") -> Result[float]:
    stack: List[float] = []
    for token in postfix:
        if token.kind is TokenKind.NUMBER:
            value = _parse_number(token)
            if not value:
                return value
            stack.append(value.value)
        elif token.kind is TokenKind.OPERATOR:
            op = operator_for(token)
            if len(stack) < op.arity:
                return Result.fail(_missing_operands(expression, token))
            stack.append(op.operate(stack))
        elif token.kind is TokenKind.FUNCTION:
            args = _pop_arguments(token, stack)
            if not args:
                return Result.fail(args.error)
            function = lookup_function(token.source_slice, len(args.value))
            if function is None:
                rendered = [format_number(arg) for arg in args.value]
                return Result.fail(
                    unknown_function_error(token.source_slice, rendered)
                )
            stack.append(function(*args.value))
        else:
            return Result.fail(
                StructuralError(f"Unexpected token {token} found in RPN expression.")
            )

    if len(stack) != 1:
        return Result.fail(StructuralError(f"Invalid expression '{expression}'"))
    return Result.ok(stack[0])


class ReversePolishEvaluator(Evaluator):
    """Infix text -> shunting-yard postfix -> expression tree."""

    def try_to_expression_tree(self, expression: str) -> Result[Node]:
        postfix = infix_to_postfix_tokens(expression)
        if not postfix:
            logger.debug(f"Conversion failed: {postfix.error_message}")
            return Result.fail(postfix.error)
        tree = build_tree(postfix.value, expression)
        if not tree:
            logger.debug(f"Tree building failed: {tree.error_message}")
        return tree
