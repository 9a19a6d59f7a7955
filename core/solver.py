# core/solver.py
import logging
from typing import List, Optional, Tuple

import sympy as sp

from core.classifier import QUADRATIC, detect_calculus_type
from core.errors import SolveError
from core.logger import log_query
from core.models import Solution, number_steps
from core.parsing import format_expr, normalize, parse_math, pick_variable
from core.plugins import find_plugin_for, load_plugins
from core.simplify import describe, simplification_steps

logger = logging.getLogger(__name__)

_PLUGINS = None


def plugins():
    global _PLUGINS
    if _PLUGINS is None:
        _PLUGINS = load_plugins()
    return _PLUGINS


# ---------------------------
# Equations
# ---------------------------
def _format_roots(var, roots) -> str:
    if not roots:
        return "No solution"
    return f"{var} = " + ", ".join(format_expr(r) for r in roots)


def solve_equation(question: str) -> Tuple[str, List[Tuple[str, str, Optional[str]]], str]:
    """
    Solve `left = right` for one variable (x when present).
    Returns (answer, step items, method).
    """
    q = normalize(question)
    if q.lower().startswith("solve "):
        q = q.split(None, 1)[1]
    left, right = (s.strip() for s in q.split("=", 1))
    left_e, right_e = parse_math(left), parse_math(right)
    diff = sp.expand(left_e - right_e)

    items = [(f"{left} = {right}", "Start with the equation", None)]

    if not diff.free_symbols:
        holds = diff == 0
        items.append((f"{format_expr(left_e)} = {format_expr(right_e)}", "Evaluate both sides", None))
        return ("True" if holds else "False"), items, "Direct Evaluation"

    var = pick_variable(diff)
    try:
        poly = sp.Poly(diff, var)
        degree = poly.degree()
    except sp.PolynomialError:
        degree = None

    if degree == 1:
        a, c = poly.all_coeffs()
        items.append((f"{format_expr(a * var + c)} = 0", "Move every term to the left and combine like terms", None))
        items.append((f"{format_expr(a * var)} = {format_expr(-c)}", "Move the constant to the right", None))
        items.append((f"{var} = {format_expr(-c)}/{format_expr(a)}", f"Divide both sides by {format_expr(a)}", "Linear Equation"))
        answer = _format_roots(var, sp.solve(diff, var))
        return answer, items, "Linear Equation"

    if degree == 2:
        a, b, c = poly.all_coeffs()
        items.append((f"{format_expr(diff)} = 0", "Write in standard form a·x^2 + b·x + c = 0", None))
        items.append((f"a = {format_expr(a)}, b = {format_expr(b)}, c = {format_expr(c)}",
                      f"Discriminant b^2 - 4ac = {format_expr(b**2 - 4*a*c)}", None))
        items.append((f"{var} = (-b ± √(b^2 - 4ac)) / 2a", "Apply the quadratic formula", "Quadratic Formula"))
        answer = _format_roots(var, sp.solve(diff, var))
        return answer, items, "Quadratic Formula"

    items.append((f"{format_expr(diff)} = 0", f"Solve for {var}", None))
    answer = _format_roots(var, sp.solve(diff, var))
    return answer, items, "Equation Solving"


# ---------------------------
# General solver
# ---------------------------
def solve_general(question: str, category: Optional[str] = None) -> Solution:
    category = category or detect_calculus_type(question)
    try:
        if "=" in question:
            answer, items, method = solve_equation(question)
            items.append((answer, "Solution", None))
            return Solution(question, answer, number_steps(items), category, method)

        steps = simplification_steps(question, factor=(category == QUADRATIC))
        if steps:
            items = [(question, "Original expression", None)]
            items += [(format_expr(s.new_expr), describe(s.change_type), None) for s in steps]
            result = format_expr(steps[-1].new_expr)
            return Solution(question, result, number_steps(items), category, "Algebraic Simplification")

        result = format_expr(parse_math(question))
        items = [(question, "Original expression", None), (result, "Evaluated result", None)]
        return Solution(question, result, number_steps(items), category, "Direct Evaluation")
    except Exception as e:
        raise SolveError(f"Failed to solve: {e}") from e


def solve_expression(question: str, preferred_topic: Optional[str] = None) -> Solution:
    """
    Classify `question`, route it to the matching topic plugin, else solve locally.
    `preferred_topic` (a plugin name or tag) overrides the classifier.
    """
    category = detect_calculus_type(question)
    plugin = find_plugin_for(question, plugins(), preferred_topic)
    try:
        if plugin is not None:
            solution = plugin.solve(question)
        else:
            solution = solve_general(question, category)
    except SolveError as e:
        logger.info("solve failed for %r: %s", question, e)
        log_query({"event": "solve", "question": question, "type": category, "error": str(e)})
        raise
    log_query({"event": "solve", "question": question, "type": solution.type, "answer": solution.result,
               "solution": solution.to_dict()})
    return solution
