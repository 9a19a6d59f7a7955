# topics/limit.py
import re

import sympy as sp

from core.classifier import LIMIT, detect_calculus_type
from core.errors import SolveError
from core.models import Solution
from core.parsing import format_expr, parse_math, split_args, strip_prefix, symbol
from core.steps import limit_steps

name = "Calculus — Limit"
tags = ["calculus", "limit"]
category = LIMIT

PREFIX = r"(?:limit|lim)\s*"
APPROACH = re.compile(r"^([a-z])\s*(?:->|→)\s*(.+)$")


def can_handle(question: str) -> bool:
    return detect_calculus_type(question) == category


def _split(question: str):
    _, body = strip_prefix(question, PREFIX)
    args = split_args(body)
    if len(args) == 3:
        return args[0], args[1], args[2]
    if len(args) == 2:
        m = APPROACH.match(args[1])
        if m:
            return args[0], m.group(1), m.group(2)
    raise ValueError("use limit(f, x, a) or limit(f, x->a)")


def _method(expr, var, point) -> str:
    if point.is_infinite:
        return "Limit at Infinity"
    value = expr.subs(var, point)
    if value.is_finite is True and not value.has(sp.nan):
        return "Direct Substitution"
    return "L'Hôpital's Rule"


def solve(question: str) -> Solution:
    try:
        clean, var_name, point_text = _split(question)
        var = symbol(var_name)
        expr = parse_math(clean)
        point = parse_math(point_text)
        if point.is_infinite:
            value = sp.limit(expr, var, point)
        else:
            value = sp.limit(expr, var, point, dir="+-")
        if value.has(sp.zoo, sp.nan, sp.AccumBounds):
            raise ValueError(f"limit of {clean} does not exist")
        result = format_expr(value)
        method = _method(expr, var, point)
    except Exception as e:
        raise SolveError("Failed to evaluate limit") from e

    return Solution(
        original=question,
        result=result,
        steps=limit_steps(clean, result, var.name, format_expr(point), method),
        type=category,
        method=method,
    )
