#! /usr/bin/env python
"""Developer shell: shows every pipeline stage for each line typed.

For an expression it prints the postfix form, the tree from both evaluators
and both results (or the error each one reports). ``:random`` generates an
expression and runs it through the same stages.
"""

import atexit
import logging
import os
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from infix_calculator.descent_evaluator import RecursiveDescentEvaluator
from infix_calculator.expression_generator import GeneratorSettings, generate_from
from infix_calculator.expression_tree import to_infix, to_prefix
from infix_calculator.result import Result
from infix_calculator.rpn_evaluator import ReversePolishEvaluator
from infix_calculator.shunting_yard import infix_to_postfix_str

try:
    import readline
except ImportError:  # pragma: no cover
    readline = None

LOG_LEVEL = getattr(
    logging,
    os.environ.get("INFIX_CALCULATOR_LOG_LEVEL", "ERROR").upper(),
    logging.ERROR,
)
HISTORY_PATH = os.path.expanduser("~/.infix_calculator_history")

EVALUATORS = (
    ("rpn", ReversePolishEvaluator()),
    ("descent", RecursiveDescentEvaluator()),
)

logger = logging.getLogger(__name__)


def _cell(result: Result, render=str):
    if result:
        return Text(render(result.value))
    return Text(f"<error> {result.error_message}", style="red")


def describe(expression: str) -> Table:
    table = Table(title=Text(expression), show_header=False)
    table.add_column("stage", style="bold")
    table.add_column("output")
    table.add_row("postfix", _cell(infix_to_postfix_str(expression)))
    for label, evaluator in EVALUATORS:
        tree = evaluator.try_to_expression_tree(expression)
        table.add_row(f"{label} tree", _cell(tree, to_prefix))
    for label, evaluator in EVALUATORS:
        table.add_row(f"{label} result", _cell(evaluator.try_evaluate(expression)))
    return table


def _load_history():
    if readline is None:
        return
    try:
        readline.read_history_file(HISTORY_PATH)
    except FileNotFoundError:
        pass
    except OSError as err:
        logger.warning(f"Could not read history {HISTORY_PATH}: {err}")

    def _persist_history():
        try:
            readline.write_history_file(HISTORY_PATH)
        except OSError as err:
            logger.warning(f"Could not write history {HISTORY_PATH}: {err}")

    atexit.register(_persist_history)


def main(console: Optional[Console] = None):
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s:%(name)s:%(message)s")
    console = console or Console()
    _load_history()
    settings = GeneratorSettings()
    while True:
        try:
            line = input(">>> ").strip()
        except EOFError:
            break
        if line.lower() in {"exit", "quit"}:
            break
        if not line:
            continue
        if line == ":random":
            line = to_infix(generate_from(settings))
        console.print(describe(line))


if __name__ == "__main__":
    main()
