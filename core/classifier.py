# core/classifier.py
import re

DERIVATIVE = "Derivative"
INTEGRAL = "Integral"
LIMIT = "Limit"
PARTIAL = "Partial Derivative"
IMPLICIT = "Implicit Differentiation"
QUADRATIC = "Quadratic"
TRIGONOMETRIC = "Trigonometric"
LOGARITHMIC = "Logarithmic"
EQUATION = "Equation"
EXPRESSION = "Expression"

CATEGORIES = (
    DERIVATIVE, INTEGRAL, LIMIT, PARTIAL, IMPLICIT,
    QUADRATIC, TRIGONOMETRIC, LOGARITHMIC, EQUATION, EXPRESSION,
)

_D_DVAR = re.compile(r"(?<![a-zA-Z])d/d[a-z]\b")
_IMPLICIT_FORM = re.compile(r"\b\w+\(\w+\)\s*=.*d\w+/d\w+")
_X = re.compile(r"(?<![a-zA-Z])x(?![a-zA-Z])")
_Y = re.compile(r"(?<![a-zA-Z])y(?![a-zA-Z])")
_LIMIT = re.compile(r"limit|\blim\b")

_MATH_SYMBOLS = re.compile(r"[+\-*/^()=∫∂]")
_NL_WORDS = re.compile(
    r"\b(find|solve|what|is|the|of|derivative|integral|integrate|differentiate)\b",
    re.IGNORECASE,
)


def is_implicit_equation(expr: str) -> bool:
    if "=" not in expr:
        return False
    if _IMPLICIT_FORM.search(expr):
        return True
    return bool(_X.search(expr) and _Y.search(expr))


def detect_calculus_type(expr: str) -> str:
    """
    Assign one category by ordered substring checks; the first hit wins,
    so `d/dx(sin(x^2))` is a Derivative even though it is also trig.
    """
    expr = expr.lower()
    if _D_DVAR.search(expr) or "derivative" in expr:
        return DERIVATIVE
    if "integral" in expr or "∫" in expr:
        return INTEGRAL
    if _LIMIT.search(expr):
        return LIMIT
    if "∂" in expr:
        return PARTIAL
    if is_implicit_equation(expr):
        return IMPLICIT
    if "x^2" in expr or "**2" in expr:
        return QUADRATIC
    if "sin" in expr or "cos" in expr or "tan" in expr:
        return TRIGONOMETRIC
    if "log" in expr or "ln" in expr:
        return LOGARITHMIC
    if "=" in expr:
        return EQUATION
    return EXPRESSION


def is_natural_language_input(text: str) -> bool:
    words = _NL_WORDS.findall(text)
    if not words:
        return False
    return not _MATH_SYMBOLS.search(text) or len(words) >= 2
