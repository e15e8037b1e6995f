import sys
from pathlib import Path

import numpy as np
import pytest

# Ensure the project root is importable when pytest starts from any directory
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from infix_calculator.descent_evaluator import RecursiveDescentEvaluator  # noqa: E402
from infix_calculator.rpn_evaluator import ReversePolishEvaluator  # noqa: E402


@pytest.fixture
def rpn():
    return ReversePolishEvaluator()


@pytest.fixture
def descent():
    return RecursiveDescentEvaluator()


@pytest.fixture(params=["rpn", "descent"])
def evaluator(request):
    """Each test using this fixture runs once per evaluation strategy."""
    if request.param == "rpn":
        return ReversePolishEvaluator()
    return RecursiveDescentEvaluator()


@pytest.fixture
def rng():
    return np.random.default_rng(20240917)
