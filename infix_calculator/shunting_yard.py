"""Infix to postfix conversion with Dijkstra's shunting-yard algorithm.

Extended with the unary negate operator and function calls of any arity. The
argument count of each function is worked out while converting and stored on
its token, since postfix notation alone does not say how many operands a
function consumes.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from infix_calculator.errors import (
    CalculatorError,
    UnmatchedParenError,
    UnsupportedTokenError,
)
from infix_calculator.operators import Associativity, Operator, operator_for
from infix_calculator.result import Result
from infix_calculator.tokenizer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)


def infix_to_postfix(tokens: Sequence[Token]) -> Result[List[Token]]:
    operator_stack: List[Token] = []
    output: List[Token] = []

    for position, token in enumerate(tokens):
        if token.kind is TokenKind.NUMBER:
            output.append(token)
        elif token.kind is TokenKind.VARIABLE:
            return Result.fail(
                UnsupportedTokenError(f"Variable token {token} is not supported")
            )
        elif token.kind is TokenKind.FUNCTION:
            arg_count = count_function_args(tokens, position)
            operator_stack.append(replace(token, arg_count=arg_count))
        elif token.kind is TokenKind.OPERATOR:
            _push_operator(token, operator_stack, output)
        elif token.kind is TokenKind.LPAREN:
            operator_stack.append(token)
        else:
            error = _close_group(token, operator_stack, output)
            if error is not None:
                return Result.fail(error)

    while operator_stack:
        top = operator_stack.pop()
        if top.kind is TokenKind.LPAREN:
            return Result.fail(
                UnmatchedParenError(
                    "No matching right parenthesis for left parenthesis "
                    f"at index {top.index}"
                )
            )
        output.append(top)

    return Result.ok(output)


def _should_pop(top: Token, incoming: Operator) -> bool:
    if top.kind is TokenKind.FUNCTION:
        return True
    if top.kind is not TokenKind.OPERATOR:
        return False
    top_op = operator_for(top)
    if top_op.precedence > incoming.precedence:
        return True
    return (
        top_op.precedence == incoming.precedence
        and top_op.associativity is Associativity.LEFT
    )


def _push_operator(token: Token, operator_stack: List[Token], output: List[Token]):
    incoming = operator_for(token)
    while operator_stack and _should_pop(operator_stack[-1], incoming):
        output.append(operator_stack.pop())
    operator_stack.append(token)


def _close_group(
    token: Token, operator_stack: List[Token], output: List[Token]
) -> Optional[CalculatorError]:
    while operator_stack and operator_stack[-1].kind is not TokenKind.LPAREN:
        output.append(operator_stack.pop())

    if not operator_stack:
        closer = "right parenthesis" if token.kind is TokenKind.RPAREN else "comma"
        return UnmatchedParenError(
            f"No matching left parenthesis for {closer} at index {token.index}."
        )

    # a comma leaves the lparen in place until the last argument is closed
    if token.kind is TokenKind.RPAREN:
        operator_stack.pop()
        if operator_stack and operator_stack[-1].kind is TokenKind.FUNCTION:
            output.append(operator_stack.pop())
    return None


def count_function_args(tokens: Sequence[Token], function_position: int) -> int:
    """Count the top level commas up to the function's matching rparen."""
    count = 0
    depth = 0
    for position in range(function_position + 1, len(tokens)):
        token = tokens[position]
        if token.kind is TokenKind.LPAREN:
            depth += 1
        elif token.kind is TokenKind.RPAREN:
            depth -= 1
            if position == function_position + 2:
                return 0
            if depth == 0:
                return count + 1
        elif token.kind is TokenKind.COMMA and depth == 1:
            count += 1
    # unbalanced, the converter reports the missing rparen
    return count + 1


def infix_to_postfix_tokens(expression: str) -> Result[List[Token]]:
    tokens = tokenize(expression)
    if not tokens:
        return tokens
    postfix = infix_to_postfix(tokens.value)
    if postfix:
        rendered = postfix_tokens_to_str(postfix.value)
        logger.debug(f"Postfix for {expression!r}: {rendered}")
    return postfix


def postfix_tokens_to_str(tokens: Sequence[Token]) -> str:
    return " ".join(token.text for token in tokens)


def infix_to_postfix_str(expression: str) -> Result[str]:
    postfix = infix_to_postfix_tokens(expression)
    if not postfix:
        return Result.fail(postfix.error)
    return Result.ok(postfix_tokens_to_str(postfix.value))
