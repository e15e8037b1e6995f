"""Builtin function registry, keyed by lower-cased name and exact arity.

Arithmetic follows IEEE-754 doubles: domain errors give nan and overflow gives
inf instead of raising, the same way the calculator's numbers behave on screen.
"""

from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np

from infix_calculator.errors import UnknownFunctionError

MathFunction = Callable[..., float]


def as_float_function(ufunc) -> MathFunction:
    def call(*args):
        with np.errstate(all="ignore"):
            return float(ufunc(*args))

    call.__name__ = getattr(ufunc, "__name__", "call")
    return call


def _log_base(value, base):
    return np.log(value) / np.log(base)


_FUNCTIONS: Dict[Tuple[str, int], MathFunction] = {
    ("pow", 2): as_float_function(np.power),
    ("abs", 1): as_float_function(np.abs),
    ("max", 2): as_float_function(np.maximum),
    ("min", 2): as_float_function(np.minimum),
    ("floor", 1): as_float_function(np.floor),
    ("ceiling", 1): as_float_function(np.ceil),
    ("ceil", 1): as_float_function(np.ceil),
    ("cos", 1): as_float_function(np.cos),
    ("sin", 1): as_float_function(np.sin),
    ("tan", 1): as_float_function(np.tan),
    ("acos", 1): as_float_function(np.arccos),
    ("asin", 1): as_float_function(np.arcsin),
    ("atan", 1): as_float_function(np.arctan),
    ("atan2", 2): as_float_function(np.arctan2),
    ("cosh", 1): as_float_function(np.cosh),
    ("sinh", 1): as_float_function(np.sinh),
    ("tanh", 1): as_float_function(np.tanh),
    ("sqrt", 1): as_float_function(np.sqrt),
    ("exp", 1): as_float_function(np.exp),
    ("log", 1): as_float_function(np.log),
    ("log", 2): as_float_function(_log_base),
    ("log10", 1): as_float_function(np.log10),
    # round half to even
    ("round", 1): as_float_function(np.round),
    ("sign", 1): as_float_function(np.sign),
    ("truncate", 1): as_float_function(np.trunc),
}

BUILTIN_FUNCTIONS: Mapping[Tuple[str, int], MathFunction] = MappingProxyType(_FUNCTIONS)


def lookup_function(name: str, arg_count: int) -> Optional[MathFunction]:
    return BUILTIN_FUNCTIONS.get((name.lower(), arg_count))


def function_arity(name: str) -> int:
    """Smallest arity registered for ``name``."""
    arities = [arity for fn_name, arity in BUILTIN_FUNCTIONS if fn_name == name.lower()]
    if not arities:
        raise KeyError(f"Unknown function: {name}")
    return min(arities)


def unknown_function_error(
    name: str, rendered_args: Sequence[str]
) -> UnknownFunctionError:
    """Error for a call with no registry entry, naming the call as written."""
    call = f"{name}({', '.join(rendered_args)})"
    return UnknownFunctionError(
        f"Failed to generate function call to '{call}': "
        f"Function '{name}({len(rendered_args)})' does not exist."
    )
