# core/models.py
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Tuple

HISTORY_LIMIT = 10


@dataclass(frozen=True)
class Step:
    step: str
    expression: str
    explanation: str
    method: Optional[str] = None


@dataclass(frozen=True)
class Solution:
    original: str
    result: str
    steps: Tuple[Step, ...]
    type: str
    method: Optional[str] = None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["steps"] = [asdict(s) for s in self.steps]
        return d


def number_steps(items: List[Tuple[str, str, Optional[str]]]) -> Tuple[Step, ...]:
    """Turn (expression, explanation, method) triples into ordinal-labelled steps."""
    return tuple(
        Step(step=str(i), expression=expr, explanation=why, method=method)
        for i, (expr, why, method) in enumerate(items, start=1)
    )


@dataclass
class SolutionHistory:
    """Recent solutions, newest first. Older entries fall off past `limit`."""
    limit: int = HISTORY_LIMIT
    _items: List[Solution] = field(default_factory=list)

    def push(self, solution: Solution):
        self._items = [solution] + self._items[: self.limit - 1]

    def clear(self):
        self._items = []

    def items(self) -> List[Solution]:
        return list(self._items)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))
