"""Console front end: read a formula, then run every root-finding method on it."""

import argparse
import logging
import sys
from typing import Callable, Sequence

from .formula import Formula, FormulaError
from .root_finding import (
    DEFAULT_MAXITER,
    DEFAULT_XTOL,
    METHODS,
    Method,
    RootFindingError,
    Step,
)

logger = logging.getLogger(__name__)

PROMPT = "f(x) = "


def _non_negative_float(text: str) -> float:
    value = float(text)
    if not value >= 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {text}")
    return value


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {text}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rootscience",
        description="Find a root of a formula in x with several iterative methods.",
    )
    parser.add_argument(
        "formula", nargs="?", help="formula in x; prompted for when omitted"
    )
    parser.add_argument("--xtol", type=_non_negative_float, default=DEFAULT_XTOL)
    parser.add_argument("--maxiter", type=_non_negative_int, default=DEFAULT_MAXITER)
    parser.add_argument(
        "-a", type=float, default=1.0, help="left end of the starting interval"
    )
    parser.add_argument(
        "-b", type=float, default=2.0, help="right end of the starting interval"
    )
    parser.add_argument(
        "--x0", type=float, default=1.0, help="starting point of newton and halley"
    )
    parser.add_argument(
        "--method",
        action="append",
        choices=sorted(METHODS),
        help="run only this method; may be repeated",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def format_error(text: str, error: FormulaError) -> str:
    """Render ``error`` under ``text`` with a caret at its position."""
    return f"  {text}\n  {' ' * error.position}^ {error.message}"


def format_step(step: Step) -> str:
    return (
        f"x{step.iteration} = {step.x:<+22.16g} "
        f"y{step.iteration} = {step.fx:<+22.16g}"
    )


def print_step(step: Step) -> None:
    print(format_step(step))


def read_formula(read: Callable[[str], str] | None = None) -> Formula | None:
    """Prompt until a valid formula is entered. ``None`` at end of input."""
    if read is None:
        read = input
    while True:
        try:
            text = read(PROMPT)
        except EOFError:
            return None
        formula = Formula(text)
        error = formula.validate()
        if error is None:
            return formula
        print(format_error(formula.text, error))


def run_method(
    method: Method,
    f: Callable[[float], float],
    *,
    a: float,
    b: float,
    x0: float,
    xtol: float,
    maxiter: int,
) -> float | None:
    """Run one method, print its steps and outcome, and return the root."""
    print(f"{method.name}:")
    if method.start == "interval":
        starts = (a, b)
    else:
        starts = (x0,)
    try:
        root = method.function(
            f, *starts, xtol=xtol, maxiter=maxiter, callback=print_step
        )
    except RootFindingError as error:
        logger.info("%s failed after %d iterations", method.name, error.iterations)
        print(f"failed: {error}")
        return None
    print(f"root = {root:+.16g}")
    return root


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(levelname)s %(name)s: %(message)s"
    )

    if args.formula is None:
        formula = read_formula()
        if formula is None:
            return 1
    else:
        formula = Formula(args.formula)
        error = formula.validate()
        if error is not None:
            print(format_error(formula.text, error), file=sys.stderr)
            return 2

    names = args.method or list(METHODS)
    for name in names:
        run_method(
            METHODS[name],
            formula,
            a=args.a,
            b=args.b,
            x0=args.x0,
            xtol=args.xtol,
            maxiter=args.maxiter,
        )
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
