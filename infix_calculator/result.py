from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from infix_calculator.errors import CalculatorError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or the error that prevented computing it, never both."""

    value: Optional[T] = None
    error: Optional[CalculatorError] = None

    def __post_init__(self):
        if self.value is not None and self.error is not None:
            raise ValueError("A result holds either a value or an error, not both")

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: CalculatorError) -> "Result[T]":
        return cls(error=error)

    @property
    def has_value(self) -> bool:
        return self.error is None

    @property
    def error_message(self) -> Optional[str]:
        return None if self.error is None else str(self.error)

    def __bool__(self) -> bool:
        return self.has_value
