# topics/integral.py
import re

import sympy as sp

from core.classifier import INTEGRAL, detect_calculus_type
from core.errors import SolveError
from core.models import Solution
from core.parsing import format_expr, normalize, parse_math, split_args, strip_prefix, symbol
from core.steps import definite_integral_steps, detect_integration_method, integral_steps

name = "Calculus — Integral"
tags = ["calculus", "integral", "integration", "antiderivative"]
category = INTEGRAL

PREFIX = r"(?:integral|integrate)(?:\s+of)?\s*"
INTEGRAL_SIGN = re.compile(r"^∫\s*(.+?)\s*d([a-z])\s*$")


def can_handle(question: str) -> bool:
    return detect_calculus_type(question) == category


def _split(question: str):
    """Return (integrand, variable name, bounds or None)."""
    m = INTEGRAL_SIGN.match(normalize(question))
    if m:
        return m.group(1), m.group(2), None
    _, body = strip_prefix(question, PREFIX)
    args = split_args(body)
    if len(args) == 1:
        return args[0], "x", None
    if len(args) == 2:
        return args[0], args[1], None
    if len(args) == 4:
        return args[0], args[1], (args[2], args[3])
    raise ValueError(f"expected 1, 2 or 4 arguments, got {len(args)}")


def solve(question: str) -> Solution:
    try:
        clean, var_name, bounds = _split(question)
        var = symbol(var_name)
        expr = parse_math(clean)
        if bounds:
            lower, upper = (parse_math(b) for b in bounds)
            value = sp.integrate(expr, (var, lower, upper))
            if value.has(sp.Integral, sp.nan, sp.zoo):
                raise ValueError("no closed form")
            result = format_expr(value)
        else:
            anti = sp.integrate(expr, var)
            if anti.has(sp.Integral):
                raise ValueError("no closed form")
            result = format_expr(anti) + " + C"
    except Exception as e:
        raise SolveError("Failed to compute integral") from e

    if bounds:
        steps = definite_integral_steps(clean, result, var.name, bounds[0], bounds[1])
    else:
        steps = integral_steps(clean, result, var.name)
    return Solution(
        original=question,
        result=result,
        steps=steps,
        type=category,
        method=detect_integration_method(clean),
    )
