# topics/implicit.py
import re

import sympy as sp

from core.classifier import IMPLICIT, detect_calculus_type
from core.errors import SolveError
from core.models import Solution
from core.parsing import X, Y, format_expr, normalize, parse_math
from core.steps import implicit_steps

name = "Calculus — Implicit Differentiation"
tags = ["calculus", "implicit", "differentiation", "chain rule"]
category = IMPLICIT

DYDX = sp.Symbol("dy/dx")


def can_handle(question: str) -> bool:
    return detect_calculus_type(question) == category


def _prepare(question: str) -> str:
    s = normalize(question)
    # "..., find dy/dx" is a request, not part of the equation
    s = re.sub(r"[,;]?\s*(?:find\s+)?d\w+/d\w+\s*$", "", s, flags=re.IGNORECASE)
    return re.sub(r"\by\s*\(\s*x\s*\)", "y", s)


def _differentiate(side: str):
    yx = sp.Function("y")(X)
    expr = parse_math(side).subs(Y, yx)
    return sp.diff(expr, X).subs(sp.Derivative(yx, X), DYDX).subs(yx, Y)


def solve(question: str) -> Solution:
    try:
        clean = _prepare(question)
        left, right = clean.split("=", 1)
        left_d, right_d = _differentiate(left), _differentiate(right)
        roots = sp.solve(sp.Eq(left_d, right_d), DYDX)
        if not roots:
            raise ValueError("dy/dx cancels out")
        result = ", ".join(format_expr(sp.simplify(r)) for r in roots)
    except Exception as e:
        raise SolveError("Failed to solve implicit differentiation") from e

    return Solution(
        original=question,
        result=result,
        steps=implicit_steps(clean, format_expr(left_d), format_expr(right_d), result),
        type=category,
        method="Chain Rule",
    )
