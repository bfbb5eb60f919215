"""Build objective and gradient callables from expression strings.

Variables are written ``x[0] ... x[n-1]`` and ``^`` is read as a power, so
the strings used in configuration files look like::

    4*x[0]^4 + 2*x[1]^2 + 2*x[0]*x[1] + 2*x[0]
    {16*x[0]^3 + 2*x[1] + 2, 4*x[1] + 2*x[0]}

Expressions are parsed with SymPy and compiled with ``lambdify`` to NumPy
code; no derivatives are taken symbolically.
"""

from __future__ import annotations

import re
from tokenize import TokenError
from typing import List

import numpy as np
import sympy
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import (
    convert_xor,
    parse_expr,
    standard_transformations,
)

from descentkit.optimize.core import ScalarFunction, VectorFunction

_TRANSFORMATIONS = standard_transformations + (convert_xor,)
_INDEX = re.compile(r"x\s*\[\s*(\d+)\s*\]")


def _substitute_indices(expression: str, n: int) -> str:
    def repl(match: re.Match) -> str:
        i = int(match.group(1))
        if i >= n:
            raise ValueError(
                f"Variable x[{i}] is out of range for a function of {n} variables."
            )
        return f"x_{i}"

    return _INDEX.sub(repl, expression)


def _symbols(n: int) -> List[sympy.Symbol]:
    if n < 1:
        raise ValueError(f"Number of variables must be >= 1, got {n}.")
    return [sympy.Symbol(f"x_{i}", real=True) for i in range(n)]


def _parse(expression: str, symbols: List[sympy.Symbol]) -> sympy.Expr:
    local_dict = {str(s): s for s in symbols}
    try:
        expr = parse_expr(expression, local_dict=local_dict, transformations=_TRANSFORMATIONS)
    except (SyntaxError, TypeError, TokenError) as exc:
        raise ValueError(f"Could not parse expression {expression!r}: {exc}") from exc
    expr = sympy.sympify(expr)
    unknown = expr.free_symbols - set(symbols)
    if unknown:
        names = sorted(str(s) for s in unknown)
        raise ValueError(f"Unknown symbols {names} in expression {expression!r}.")
    undefined = expr.atoms(AppliedUndef)
    if undefined:
        names = sorted(str(f.func) for f in undefined)
        raise ValueError(f"Unknown functions {names} in expression {expression!r}.")
    if expr.has(sympy.I):
        raise ValueError(f"Expression {expression!r} is complex-valued.")
    return expr


def _split_components(expression: str) -> List[str]:
    body = expression.strip()
    if body[:1] in "{[" and body[-1:] in "}]":
        body = body[1:-1]
    parts: List[str] = []
    depth = 0
    current = []
    for char in body:
        if char in "([{":
            depth += 1
        elif char in ")]}":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def scalar_function(expression: str, n: int) -> ScalarFunction:
    """Compile a scalar expression of ``x[0] .. x[n-1]``.

    Raises:
        ValueError: On syntax errors, unknown symbols or functions, complex
            constants and out-of-range indices.
    """
    symbols = _symbols(n)
    expr = _parse(_substitute_indices(expression, n), symbols)
    compiled = sympy.lambdify([symbols], expr, "numpy")

    def f(x: np.ndarray) -> float:
        return float(compiled(np.asarray(x, dtype=float)))

    f.expression = expression
    return f


def vector_function(expression: str, n: int) -> VectorFunction:
    """Compile a vector expression ``{e0, e1, ...}`` with exactly ``n`` components."""
    symbols = _symbols(n)
    components = _split_components(_substitute_indices(expression, n))
    if len(components) != n:
        raise ValueError(
            f"Vector expression {expression!r} has {len(components)} components, "
            f"expected {n}."
        )
    exprs = [_parse(component, symbols) for component in components]
    compiled = sympy.lambdify([symbols], exprs, "numpy")

    def grad_f(x: np.ndarray) -> np.ndarray:
        values = compiled(np.asarray(x, dtype=float))
        return np.asarray(values, dtype=float).reshape(-1)

    grad_f.expression = expression
    return grad_f


__all__ = ["scalar_function", "vector_function"]
