"""Error kinds raised or carried by the calculator pipeline."""


class CalculatorError(Exception):
    """Base class. ``str(error)`` is the user facing message."""


class TokenizationError(CalculatorError):
    pass


class UnmatchedParenError(CalculatorError):
    pass


class UnsupportedTokenError(CalculatorError):
    pass


class ArgumentCountError(CalculatorError):
    pass


class UnknownFunctionError(CalculatorError):
    pass


class StructuralError(CalculatorError):
    pass


class InvalidNumberError(CalculatorError):
    pass


class ParseError(CalculatorError):
    pass


class EvaluationError(CalculatorError):
    def __init__(self, expression: str, message: str):
        super().__init__(
            f"There was an error evaluating expression '{expression}': {message}"
        )
        self.expression = expression
        self.reason = message
