import math

import pytest

from infix_calculator.math_functions import (
    BUILTIN_FUNCTIONS,
    function_arity,
    lookup_function,
)


class TestLookup:
    @pytest.mark.parametrize(
        "name, arity",
        [
            ("pow", 2), ("abs", 1), ("max", 2), ("min", 2), ("floor", 1),
            ("ceiling", 1), ("ceil", 1), ("cos", 1), ("sin", 1), ("tan", 1),
            ("atan", 1), ("atan2", 2), ("sqrt", 1),
        ],
    )
    def test_supported_names(self, name, arity):
        assert lookup_function(name, arity) is not None

    def test_name_is_case_insensitive(self):
        assert lookup_function("PoW", 2) is lookup_function("pow", 2)

    def test_arity_must_match(self):
        assert lookup_function("pow", 1) is None
        assert lookup_function("sin", 2) is None
        assert lookup_function("nope", 1) is None

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            BUILTIN_FUNCTIONS[("nope", 1)] = abs


class TestArity:
    def test_function_arity(self):
        assert function_arity("atan2") == 2
        assert function_arity("Floor") == 1
        assert function_arity("log") == 1

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            function_arity("nope")


class TestValues:
    def test_results_are_python_floats(self):
        assert type(lookup_function("floor", 1)(1.5)) is float

    def test_rounding_is_half_to_even(self):
        rounder = lookup_function("round", 1)
        assert rounder(2.5) == 2.0
        assert rounder(3.5) == 4.0

    def test_domain_errors_are_quiet(self):
        assert math.isnan(lookup_function("sqrt", 1)(-1.0))
        assert lookup_function("log", 1)(0.0) == -math.inf

    def test_max_propagates_nan(self):
        assert math.isnan(lookup_function("max", 2)(math.nan, 1.0))

    def test_log_with_base(self):
        assert lookup_function("log", 2)(100.0, 10.0) == pytest.approx(2.0)
