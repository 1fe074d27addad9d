try:
    import polars  # noqa: F401
except ImportError:
    raise ImportError(
        "currystep needs the `polars` library. \n Please install it, typically with `pip install polars`"
    )

from .core import (
    FreshNames,
    alpha_equivalent,
    evaluate,
    free_names,
    reduction_chain,
    step,
    substitute,
    uniquify,
    used_names,
)
from .dataframe import from_nodes, to_nodes, trace
from .display import show, show_reduction, to_svg
from .errors import CurrystepError, FreshNamesExhausted, ParseError
from .parser import parse
from .printer import render
from .term import L, Abstraction, Application, Identifier, Term, V, Variable

__all__ = [
    "Identifier",
    "Term",
    "Variable",
    "Abstraction",
    "Application",
    "V",
    "L",
    "used_names",
    "free_names",
    "substitute",
    "FreshNames",
    "uniquify",
    "step",
    "evaluate",
    "reduction_chain",
    "alpha_equivalent",
    "render",
    "parse",
    "to_nodes",
    "from_nodes",
    "trace",
    "to_svg",
    "show",
    "show_reduction",
    "CurrystepError",
    "ParseError",
    "FreshNamesExhausted",
]
