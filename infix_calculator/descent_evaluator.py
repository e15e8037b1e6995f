"""Recursive-descent evaluator working straight off the source text.

Grammar::

    expression = term { ("+" | "-") term }
    term       = innerTerm { ("*" | "/" | "%") innerTerm }
    innerTerm  = operand [ "^" innerTerm ]
    operand    = ("-" factor) | factor
    factor     = "(" expression ")" | number | function
    function   = letter { letter | digit } "(" [ expression { "," expression } ] ")"

Spaces are allowed between lexemes. A unary minus applies to a single factor
before ``^`` is considered, so ``-2^2`` is ``(-2)^2``, the same reading the
shunting-yard evaluator gives it. ``--2`` is rejected here.
"""

import logging
from typing import List, Optional

from infix_calculator.errors import (
    CalculatorError,
    InvalidNumberError,
    ParseError,
    StructuralError,
    UnsupportedTokenError,
)
from infix_calculator.evaluator import Evaluator
from infix_calculator.expression_tree import BinOp, Call, Neg, Node, Num, to_infix
from infix_calculator.math_functions import lookup_function, unknown_function_error
from infix_calculator.operators import OPERATORS
from infix_calculator.result import Result
from infix_calculator.tokenizer import (
    is_identifier_char,
    is_identifier_start,
    is_number_char,
)

logger = logging.getLogger(__name__)


class DescentParser:
    def __init__(self, text: str):
        self.text = text
        self.i = 0

    def peek(self) -> Optional[str]:
        while self.i < len(self.text) and self.text[self.i] == " ":
            self.i += 1
        return self.text[self.i] if self.i < len(self.text) else None

    def take(self, expected: Optional[str] = None) -> str:
        char = self.peek()
        if char is None:
            if expected is None:
                raise ParseError("Unexpected end of input")
            raise ParseError(f"Expected {expected!r} but hit end of input")
        if expected is not None and char != expected:
            raise ParseError(
                f"Expected {expected!r} but got {char!r} at index {self.i}"
            )
        self.i += 1
        return char

    def parse(self) -> Node:
        node = self._expression()
        if self.peek() is not None:
            raise ParseError(
                f"Unexpected trailing input {self.text[self.i:]!r} at index {self.i}"
            )
        return node

    def _expression(self) -> Node:
        node = self._term()
        while self.peek() in ("+", "-"):
            op = OPERATORS[self.take()]
            node = BinOp(op, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._inner_term()
        while self.peek() in ("*", "/", "%"):
            op = OPERATORS[self.take()]
            node = BinOp(op, node, self._inner_term())
        return node

    def _inner_term(self) -> Node:
        node = self._operand()
        if self.peek() == "^":
            op = OPERATORS[self.take()]
            node = BinOp(op, node, self._inner_term())
        return node

    def _operand(self) -> Node:
        if self.peek() == "-":
            self.take()
            return Neg(self._factor())
        return self._factor()

    def _factor(self) -> Node:
        char = self.peek()
        if char == "(":
            self.take("(")
            node = self._expression()
            self.take(")")
            return node
        if char is None:
            raise ParseError(
                "Unexpected end of input, expected a number, function or '('"
            )
        if is_number_char(char):
            return self._number()
        if is_identifier_start(char):
            return self._function()
        raise ParseError(f"Unexpected character {char!r} at index {self.i}")

    def _scan(self, accept) -> str:
        start = self.i
        while self.i < len(self.text) and accept(self.text[self.i]):
            self.i += 1
        return self.text[start : self.i]

    def _number(self) -> Num:
        start = self.i
        literal = self._scan(is_number_char)
        try:
            return Num(float(literal))
        except ValueError:
            raise InvalidNumberError(
                f"Invalid number literal '{literal}' at index {start}"
            ) from None

    def _function(self) -> Call:
        start = self.i
        name = self._scan(is_identifier_char)
        if self.i >= len(self.text) or self.text[self.i] != "(":
            raise UnsupportedTokenError(
                f"Variable token '{name}' at index {start} is not supported"
            )
        self.take("(")
        args: List[Node] = []
        if self.peek() != ")":
            args.append(self._expression())
            while self.peek() == ",":
                self.take(",")
                args.append(self._expression())
        self.take(")")

        function = lookup_function(name, len(args))
        if function is None:
            raise unknown_function_error(name, [to_infix(arg) for arg in args])
        return Call(name, tuple(args), function)


class RecursiveDescentEvaluator(Evaluator):
    """Infix text -> expression tree, no token or postfix stage."""

    def try_to_expression_tree(self, expression: str) -> Result[Node]:
        try:
            tree = DescentParser(expression).parse()
        except CalculatorError as error:
            logger.debug(f"Parsing {expression!r} failed: {error}")
            return Result.fail(error)
        except RecursionError:
            logger.debug(f"Parsing {expression!r} ran out of stack")
            return Result.fail(StructuralError("Expression is nested too deeply"))
        return Result.ok(tree)
