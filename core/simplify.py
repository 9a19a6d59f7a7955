# core/simplify.py
from dataclasses import dataclass
from typing import List

import sympy as sp

from core.parsing import parse_math


@dataclass(frozen=True)
class SimplifyStep:
    new_expr: object
    change_type: str


PASSES = [
    ("SIMPLIFY_ARITHMETIC", lambda e: e.doit()),
    ("EXPAND", sp.expand),
    ("CANCEL", sp.cancel),
    ("TRIG_SIMPLIFY", sp.trigsimp),
    ("SIMPLIFY", sp.simplify),
]


def simplification_steps(text: str, factor: bool = False) -> List[SimplifyStep]:
    """
    Run the expression through an ordered list of sympy rewrites and keep
    the ones that changed something. An empty list means nothing changed.
    """
    current = parse_math(text, evaluate=False)
    passes = PASSES + [("FACTOR", sp.factor)] if factor else PASSES
    steps = []
    for change, rewrite in passes:
        new = rewrite(current)
        if sp.sstr(new) != sp.sstr(current):
            steps.append(SimplifyStep(new, change))
            current = new
    return steps


def describe(change_type: str) -> str:
    return change_type.replace("_", " ").capitalize()
