import dataclasses

import pytest

from core.models import Solution, SolutionHistory, Step, number_steps


def _solution(n):
    return Solution(original=f"d/dx(x^{n})", result=f"{n}*x^{n - 1}", steps=(), type="Derivative")


def test_number_steps_labels_from_one():
    steps = number_steps([("a", "first", None), ("b", "second", "Rule")])
    assert steps == (Step("1", "a", "first"), Step("2", "b", "second", "Rule"))


def test_solution_is_immutable():
    sol = _solution(2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        sol.result = "changed"


def test_to_dict():
    sol = Solution("x+x", "2*x", number_steps([("2*x", "Simplify", None)]), "Expression", "Algebraic Simplification")
    d = sol.to_dict()
    assert d["result"] == "2*x"
    assert d["steps"][0] == {"step": "1", "expression": "2*x", "explanation": "Simplify", "method": None}


def test_history_is_capped_newest_first():
    history = SolutionHistory()
    for n in range(1, 12):
        history.push(_solution(n))
    items = history.items()
    assert len(items) == 10
    assert items[0].original == "d/dx(x^11)"
    assert items[-1].original == "d/dx(x^2)"


def test_history_below_limit_and_clear():
    history = SolutionHistory(limit=3)
    history.push(_solution(1))
    history.push(_solution(2))
    assert [s.original for s in history] == ["d/dx(x^2)", "d/dx(x^1)"]
    history.clear()
    assert len(history) == 0
