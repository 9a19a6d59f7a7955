# core/steps.py
# Display narrative for each solver. These are picked by substring
# heuristics and do not trace what sympy actually did.
from typing import Tuple

from core.models import Step, number_steps


def needs_integration_by_parts(expr: str) -> bool:
    return "x" in expr and any(tok in expr for tok in ("sin", "cos", "e^", "ln"))


def needs_substitution(expr: str) -> bool:
    return "(" in expr and any(tok in expr for tok in ("sin", "cos", "^"))


def detect_integration_method(expr: str) -> str:
    if needs_integration_by_parts(expr):
        return "Integration by Parts"
    if needs_substitution(expr):
        return "U-Substitution"
    if "sin" in expr or "cos" in expr:
        return "Trigonometric Integration"
    if "1/(x^2" in expr:
        return "Partial Fractions"
    return "Power Rule"


def derivative_steps(expr: str, result: str, var: str = "x") -> Tuple[Step, ...]:
    items = [(f"d/d{var}({expr})", "Find the derivative of the given function", None)]

    if "^" in expr:
        items.append((f"Apply power rule: d/d{var}({var}^n) = n·{var}^(n-1)",
                      "Use the power rule for differentiation", "Power Rule"))
    elif "sin" in expr or "cos" in expr:
        items.append(("Apply trigonometric rules",
                      "d/dx(sin(x)) = cos(x), d/dx(cos(x)) = -sin(x)", "Trigonometric Rules"))
    elif "ln" in expr or "log" in expr:
        items.append(("Apply logarithm rule: d/dx(ln(x)) = 1/x",
                      "Differentiate the logarithm, then multiply by the inner derivative", "Chain Rule"))

    items.append((result, "Final derivative", None))
    return number_steps(items)


def integral_steps(expr: str, result: str, var: str = "x") -> Tuple[Step, ...]:
    items = [(f"∫ {expr} d{var}", "Find the indefinite integral", None)]

    if "x^" in expr:
        items.append(("Apply power rule: ∫ x^n dx = x^(n+1)/(n+1)",
                      "Use the power rule for integration", "Power Rule"))
    elif needs_substitution(expr):
        items.append(("Use substitution method",
                      "Let u = inner function, du = derivative dx", "U-Substitution"))
    elif needs_integration_by_parts(expr):
        items.append(("Use integration by parts: ∫ u dv = uv - ∫ v du",
                      "Choose u and dv appropriately", "Integration by Parts"))

    items.append((result, "Final integral with constant of integration", None))
    return number_steps(items)


def definite_integral_steps(expr: str, result: str, var: str, lower: str, upper: str) -> Tuple[Step, ...]:
    return number_steps([
        (f"∫[{lower}, {upper}] {expr} d{var}", "Find the definite integral", None),
        (f"F({upper}) - F({lower})", "Evaluate the antiderivative at the bounds and subtract",
         "Fundamental Theorem of Calculus"),
        (result, "Value of the definite integral", None),
    ])


def implicit_steps(original: str, left_deriv: str, right_deriv: str, result: str) -> Tuple[Step, ...]:
    left, right = original.split("=", 1)
    return number_steps([
        (original, "Original equation", None),
        (f"d/dx({left.strip()}) = d/dx({right.strip()})",
         "Take derivative of both sides with respect to x", None),
        (f"{left_deriv} = {right_deriv}", "Apply chain rule to terms involving y", "Chain Rule"),
        (f"dy/dx = {result}", "Solve for dy/dx", None),
    ])


def partial_steps(expr: str, result: str, var: str) -> Tuple[Step, ...]:
    return number_steps([
        (f"∂/∂{var}({expr})", f"Find the partial derivative with respect to {var}", None),
        (f"Treat every variable other than {var} as a constant",
         "Differentiate term by term", "Partial Differentiation"),
        (result, "Final partial derivative", None),
    ])


def limit_steps(expr: str, result: str, var: str, point: str, method: str) -> Tuple[Step, ...]:
    if method == "Direct Substitution":
        middle = (f"Substitute {var} = {point}", "The function is defined at the point", method)
    elif method == "Limit at Infinity":
        middle = (f"Compare the growth of each term as {var} → {point}",
                  "The dominant terms decide the limit", method)
    else:
        middle = (f"Substituting {var} = {point} gives an indeterminate form",
                  "Differentiate numerator and denominator or simplify first", method)
    return number_steps([
        (f"lim({var}→{point}) {expr}", "Find the limit", None),
        middle,
        (result, "Value of the limit", None),
    ])
