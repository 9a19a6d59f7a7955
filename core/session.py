# core/session.py
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from core.classifier import is_natural_language_input
from core.logger import log_query
from core.models import HISTORY_LIMIT, Solution, SolutionHistory
from core.settings import LLMConfig
from core.solver import solve_expression
from utils.llm_service import LLMNotConfiguredError, LLMService

logger = logging.getLogger(__name__)

EXAMPLES = [
    "d/dx(x^3 + 2x^2 - 5x + 1)",
    "integral(x^2 + 3x)",
    "d/dx(sin(x^2))",
    "integral(x*e^x)",
]

ADVANCED_EXAMPLES = [
    "x^2 + y^2 = 25",
    "integral(x*sin(x))",
    "d/dx(ln(x^2 + 1))",
    "integral(1/(x^2 + 1))",
    "limit(sin(x)/x, x, 0)",
    "∂/∂x(x^2*y + y^3)",
]


@dataclass
class ChatMessage:
    role: str
    content: str
    kind: str = "chat"


class TutorSession:
    """
    Everything one interactive user owns: the current input, the latest
    solution, recent history, the AI chat log and the optional LLM service.
    """

    def __init__(self, llm_service: Optional[LLMService] = None, history_limit: int = HISTORY_LIMIT,
                 service_factory: Callable[[LLMConfig], LLMService] = LLMService):
        self.expression = ""
        self.solution: Optional[Solution] = None
        self.history = SolutionHistory(limit=history_limit)
        self.chat: List[ChatMessage] = []
        self.llm_service = llm_service
        self.service_factory = service_factory
        self.last_conversion: Optional[str] = None

    @property
    def connected(self) -> bool:
        return self.llm_service is not None

    def connect(self, config: LLMConfig):
        self.llm_service = self.service_factory(config)

    def disconnect(self):
        self.llm_service = None

    def _require_llm(self, action: str) -> LLMService:
        if self.llm_service is None:
            raise LLMNotConfiguredError(f"Connect AI assistant to {action}")
        return self.llm_service

    def submit(self, text: Optional[str] = None, preferred_topic: Optional[str] = None) -> Solution:
        text = self.expression if text is None else text
        if not text or not text.strip():
            raise ValueError("Please enter a mathematical expression")
        self.expression = text

        final = text.strip()
        self.last_conversion = None
        if self.llm_service is not None and is_natural_language_input(final):
            final = self.llm_service.parse_natural_language(final) or final
            self.last_conversion = final
            logger.info("converted %r to %r", text, final)

        solution = solve_expression(final, preferred_topic)
        self.solution = solution
        self.history.push(solution)
        return solution

    def generate_practice_problem(self, topic: str = "calculus", difficulty: str = "intermediate"):
        problem = self._require_llm("generate problems").generate_problem(topic, difficulty)
        self.expression = problem.problem
        log_query({"event": "practice", "topic": topic, "difficulty": difficulty, "problem": problem.problem})
        return problem

    def _context(self) -> str:
        if not self.expression:
            return "No current problem"
        result = self.solution.result if self.solution else "not solved yet"
        return f"Current problem: {self.expression}\nCurrent solution: {result}"

    def ask(self, message: str) -> str:
        service = self._require_llm("chat")
        self.chat.append(ChatMessage("user", message))
        reply = service.chat_assistance(self._context(), message)
        self.chat.append(ChatMessage("assistant", reply))
        return reply

    def enhance_explanation(self) -> str:
        service = self._require_llm("explain solutions")
        if not self.expression or self.solution is None:
            raise ValueError("No current problem to explain")
        reply = service.enhance_explanation(self.expression, self.solution.result)
        self.chat.append(ChatMessage("assistant", reply, kind="explanation"))
        return reply

    def start_tutoring(self) -> str:
        service = self._require_llm("start tutoring")
        if not self.expression:
            raise ValueError("No current problem for tutoring")
        reply = service.provide_tutoring(self.expression, "Can you help me understand this step by step?")
        self.chat.append(ChatMessage("assistant", reply, kind="tutoring"))
        return reply

    def clear_chat(self):
        self.chat = []
