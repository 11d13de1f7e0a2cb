"""rootscience: text formulas in one variable and iterative root finding."""

from . import formula, root_finding

__all__ = [
    "formula",
    "root_finding",
]

__version__ = "0.1.0"
