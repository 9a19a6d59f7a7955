# utils/schemas.py
from typing import List, Literal

from pydantic import BaseModel, Field

Difficulty = Literal["beginner", "intermediate", "advanced"]


class AnalysisStep(BaseModel):
    step: int
    action: str = Field(..., description="What to do")
    reasoning: str = Field(..., description="Why we do it")
    result: str = Field(..., description="What we get")


class ProblemAnalysis(BaseModel):
    type: str
    approach: str
    difficulty: Difficulty
    concepts: List[str] = Field(default_factory=list)
    solution: str
    explanation: str
    steps: List[AnalysisStep] = Field(default_factory=list)


class GeneratedProblem(BaseModel):
    problem: str = Field(..., description="The problem statement")
    type: str
    difficulty: Difficulty
    hints: List[str] = Field(default_factory=list)
    solution: str = Field(..., description="Complete solution with steps")
