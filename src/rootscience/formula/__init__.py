from ._exceptions import FormulaError, FormulaSyntaxError
from ._formula import Formula, parse_formula
from ._tables import FUNCTIONS, OPERATORS, VARIABLE, Operator, Precedence

__all__ = [
    "FUNCTIONS",
    "OPERATORS",
    "VARIABLE",
    "Formula",
    "FormulaError",
    "FormulaSyntaxError",
    "Operator",
    "Precedence",
    "parse_formula",
]
