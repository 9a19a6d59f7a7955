# topics/partial.py
import sympy as sp

from core.classifier import PARTIAL, detect_calculus_type
from core.errors import SolveError
from core.models import Solution
from core.parsing import format_expr, parse_math, strip_prefix, symbol
from core.steps import partial_steps

name = "Calculus — Partial Derivative"
tags = ["calculus", "partial", "multivariable"]
category = PARTIAL

PREFIX = r"∂\s*/\s*∂\s*([a-z])\s*"


def can_handle(question: str) -> bool:
    return detect_calculus_type(question) == category


def solve(question: str) -> Solution:
    try:
        m, clean = strip_prefix(question, PREFIX)
        if m is None:
            raise ValueError("use ∂/∂x(f)")
        var = symbol(m.group(1))
        result = format_expr(sp.diff(parse_math(clean), var))
    except Exception as e:
        raise SolveError("Failed to compute partial derivative") from e

    return Solution(
        original=question,
        result=result,
        steps=partial_steps(clean, result, var.name),
        type=category,
        method="Partial Differentiation",
    )
