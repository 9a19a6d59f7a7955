# core/parsing.py
import re
from typing import List

import sympy as sp
from sympy.parsing.sympy_parser import (
    parse_expr,
    standard_transformations,
    implicit_multiplication_application,
    convert_xor,
)

TRANSFORMS = standard_transformations + (convert_xor, implicit_multiplication_application)

X, Y = sp.symbols("x y")

LOCALS = {
    "e": sp.E,
    "ln": sp.log,
    "pi": sp.pi,
    "oo": sp.oo,
    "inf": sp.oo,
    "infinity": sp.oo,
}

# Greek names stay whole instead of being split into single-letter products.
GREEK = ("alpha", "delta", "theta", "mu", "phi", "omega")
LOCALS.update({name: sp.Symbol(name) for name in GREEK})

# parse_expr evaluates its input, and input comes from a web form: only math notation gets through.
_ALLOWED = re.compile(r"^[A-Za-z0-9\s+\-*/^().,=<>]*$")

_UNICODE = {
    "²": "^2",
    "³": "^3",
    "√": "sqrt ",
    "π": "pi",
    "×": "*",
    "÷": "/",
    "−": "-",
    "∞": "oo",
}


def normalize(text: str) -> str:
    s = text.strip()
    for k, v in _UNICODE.items():
        s = s.replace(k, v)
    return s


def parse_math(text: str, evaluate: bool = True):
    """Parse tutor notation (2x^2, e^x, ln(x)) into a sympy expression."""
    s = normalize(text)
    if not s:
        raise ValueError("empty expression")
    if not _ALLOWED.match(s) or "__" in s:
        raise ValueError(f"unsupported characters in {s!r}")
    return parse_expr(s, local_dict=dict(LOCALS), transformations=TRANSFORMS, evaluate=evaluate)


def format_expr(expr) -> str:
    return sp.sstr(expr).replace("**", "^")


def matching_paren(s: str, start: int = 0) -> int:
    """Index of the ')' closing the '(' at `start`, or -1."""
    depth = 0
    for i in range(start, len(s)):
        if s[i] == "(":
            depth += 1
        elif s[i] == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1


def unwrap_parens(body: str) -> str:
    body = body.strip()
    if body.startswith("(") and matching_paren(body) == len(body) - 1:
        return body[1:-1].strip()
    return body


def strip_prefix(text: str, pattern: str):
    """
    Remove a wrapper prefix like `d/dx` and one pair of balanced outer parens.
    Returns (match, body); match is None when the prefix is absent.
    """
    s = normalize(text)
    m = re.match(pattern, s, re.IGNORECASE)
    if not m:
        return None, s
    return m, unwrap_parens(s[m.end():])


def split_args(body: str) -> List[str]:
    """Split on commas that are not nested inside parentheses."""
    args, depth, cur = [], 0, []
    for ch in body:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "," and depth == 0:
            args.append("".join(cur).strip())
            cur = []
            continue
        cur.append(ch)
    args.append("".join(cur).strip())
    return args


def symbol(name: str):
    name = name.strip()
    if not re.fullmatch(r"[a-zA-Z]", name):
        raise ValueError(f"not a variable: {name!r}")
    return sp.Symbol(name)


def pick_variable(expr, preferred=X):
    syms = sorted(expr.free_symbols, key=lambda s: s.name)
    if preferred in syms or not syms:
        return preferred
    return syms[0]
