# topics/derivative.py
import sympy as sp

from core.classifier import DERIVATIVE, detect_calculus_type
from core.errors import SolveError
from core.models import Solution
from core.parsing import X, format_expr, parse_math, strip_prefix, symbol
from core.steps import derivative_steps

name = "Calculus — Derivative"
tags = ["calculus", "derivative", "differentiation"]
category = DERIVATIVE

PREFIX = r"(?:d/d([a-z])|derivative(?:\s+of)?)\s*"


def can_handle(question: str) -> bool:
    return detect_calculus_type(question) == category


def solve(question: str) -> Solution:
    try:
        m, clean = strip_prefix(question, PREFIX)
        var = symbol(m.group(1)) if m and m.group(1) else X
        result = format_expr(sp.diff(parse_math(clean), var))
    except Exception as e:
        raise SolveError("Failed to compute derivative") from e

    return Solution(
        original=question,
        result=result,
        steps=derivative_steps(clean, result, var.name),
        type=category,
        method="Power Rule / Chain Rule",
    )
