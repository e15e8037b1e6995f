"""Splits an infix expression into tokens.

The tokenizer does not check syntax. It only classifies characters: numbers,
identifiers (functions when directly followed by ``(``, variables otherwise),
parentheses, commas and single character operators. A ``-`` is tagged as
unary negate unless it follows a number or a right parenthesis.
"""

import logging
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from infix_calculator.errors import TokenizationError
from infix_calculator.operators import NEGATE_SYMBOL, OPERATOR_CHARACTERS
from infix_calculator.result import Result

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    NUMBER = "Number"
    OPERATOR = "Operator"
    FUNCTION = "Function"
    VARIABLE = "Variable"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    index: int
    length: int
    source: str = field(repr=False)
    operator_symbol: Optional[str] = None
    arg_count: Optional[int] = None

    @property
    def source_slice(self) -> str:
        return self.source[self.index : self.index + self.length]

    @property
    def end_index(self) -> int:
        return self.index + self.length - 1

    @property
    def text(self) -> str:
        """Postfix rendering: the source slice, with unary minus shown as ``~``."""
        if self.operator_symbol == NEGATE_SYMBOL:
            return NEGATE_SYMBOL
        return self.source_slice

    def __str__(self) -> str:
        return f"'{self.source_slice}' at index {self.index}"


SINGLE_CHAR_TOKENS = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}


def is_number_char(char: str) -> bool:
    return char in string.digits or char == "."


def is_identifier_start(char: str) -> bool:
    return char.isascii() and char.isalpha()


def is_identifier_char(char: str) -> bool:
    return char.isascii() and char.isalnum()


def _scan(source: str, index: int, accept: Callable[[str], bool]) -> int:
    while index < len(source) and accept(source[index]):
        index += 1
    return index


def tokenize(source: str) -> Result[List[Token]]:
    tokens: List[Token] = []
    index = 0
    while index < len(source):
        char = source[index]

        if char == " ":
            index += 1
            continue

        if is_number_char(char):
            end = _scan(source, index, is_number_char)
            tokens.append(Token(TokenKind.NUMBER, index, end - index, source))
            index = end
            continue

        if is_identifier_start(char):
            end = _scan(source, index, is_identifier_char)
            is_call = end < len(source) and source[end] == "("
            kind = TokenKind.FUNCTION if is_call else TokenKind.VARIABLE
            tokens.append(Token(kind, index, end - index, source))
            index = end
            continue

        if char in SINGLE_CHAR_TOKENS:
            tokens.append(Token(SINGLE_CHAR_TOKENS[char], index, 1, source))
            index += 1
            continue

        if char in OPERATOR_CHARACTERS:
            previous = tokens[-1] if tokens else None
            symbol = char
            if char == "-" and (
                previous is None
                or previous.kind not in (TokenKind.NUMBER, TokenKind.RPAREN)
            ):
                symbol = NEGATE_SYMBOL
            tokens.append(
                Token(TokenKind.OPERATOR, index, 1, source, operator_symbol=symbol)
            )
            index += 1
            continue

        previous_text = str(tokens[-1]) if tokens else "none"
        logger.debug(f"Rejected {source!r} at index {index}")
        return Result.fail(
            TokenizationError(
                f"Invalid character '{char}' at index {index}. "
                f"Previous token was {previous_text}"
            )
        )

    logger.debug(f"Tokenized {source!r} into {len(tokens)} tokens")
    return Result.ok(tokens)
