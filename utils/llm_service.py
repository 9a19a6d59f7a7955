# utils/llm_service.py
import logging
import os
import re
from typing import Dict, List, Optional

from huggingface_hub import InferenceClient
from openai import OpenAI
from pydantic import ValidationError

from core.logger import log_query
from core.settings import DEFAULT_BASE_URL, LLMConfig
from utils.prompt_templates import (
    ANALYZE_PROMPT,
    CHAT_PROMPT,
    ENHANCE_PROMPT,
    GENERATE_PROMPT,
    PARSER_PROMPT,
    TUTOR_PROMPT,
)
from utils.schemas import GeneratedProblem, ProblemAnalysis

logger = logging.getLogger(__name__)

APP_URL = os.environ.get("CALC_TUTOR_URL", "http://localhost:8501")
TEMPERATURE = 0.7
MAX_TOKENS = 2000

Messages = List[Dict[str, str]]


class LLMError(RuntimeError):
    pass


class LLMResponseParseError(LLMError):
    pass


class LLMNotConfiguredError(LLMError):
    pass


_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def extract_json(text: str) -> str:
    """Models like to wrap JSON in a markdown fence; drop it."""
    s = text.strip()
    m = _FENCE.match(s)
    return m.group(1) if m else s


def messages_to_prompt(messages: Messages) -> str:
    parts = [f"{m['role'].capitalize()}: {m['content'].strip()}" for m in messages]
    return "\n\n".join(parts) + "\n\nAssistant:"


class LLMService:
    """
    Single-shot request/response wrapper around a remote text model.
    Nothing is retried or cached; every call carries the full message list.
    """

    def __init__(self, config: LLMConfig, client=None):
        self.config = config
        self.client = client if client is not None else self._build_client()

    def _build_client(self):
        if self.config.backend == "huggingface":
            return InferenceClient(model=self.config.model, token=self.config.api_key)
        return OpenAI(
            api_key=self.config.api_key,
            base_url=self.config.base_url or DEFAULT_BASE_URL,
            max_retries=0,
            default_headers={"HTTP-Referer": APP_URL},
        )

    def _make_request(self, messages: Messages) -> str:
        try:
            if self.config.backend == "huggingface":
                text = self.client.text_generation(
                    messages_to_prompt(messages),
                    max_new_tokens=MAX_TOKENS,
                    temperature=TEMPERATURE,
                )
            else:
                resp = self.client.chat.completions.create(
                    model=self.config.model,
                    messages=messages,
                    temperature=TEMPERATURE,
                    max_tokens=MAX_TOKENS,
                )
                text = resp.choices[0].message.content if resp.choices else ""
        except Exception as e:
            logger.error("LLM request to %s failed: %s", self.config.model, e)
            log_query({"event": "llm", "model": self.config.model, "error": str(e)})
            raise LLMError(f"LLM API error: {e}") from e
        return (text or "").strip()

    def parse_natural_language(self, text: str) -> str:
        return self._make_request([
            {"role": "system", "content": PARSER_PROMPT.strip()},
            {"role": "user", "content": text},
        ])

    def analyze_problem(self, expression: str) -> ProblemAnalysis:
        reply = self._make_request([
            {"role": "system", "content": ANALYZE_PROMPT.strip()},
            {"role": "user", "content": f"Analyze this mathematical expression: {expression}"},
        ])
        try:
            return ProblemAnalysis.model_validate_json(extract_json(reply))
        except ValidationError as e:
            raise LLMResponseParseError("Failed to parse LLM response") from e

    def enhance_explanation(self, expression: str, current_solution: str) -> str:
        return self._make_request([
            {"role": "system", "content": ENHANCE_PROMPT.strip()},
            {"role": "user", "content": (
                f"Expression: {expression}\n"
                f"Current solution: {current_solution}\n\n"
                "Provide an enhanced explanation of this solution."
            )},
        ])

    def provide_tutoring(self, expression: str, question: str) -> str:
        return self._make_request([
            {"role": "system", "content": TUTOR_PROMPT.strip()},
            {"role": "user", "content": f"I'm working on: {expression}\nMy question: {question}"},
        ])

    def generate_problem(self, topic: str = "calculus", difficulty: str = "intermediate") -> GeneratedProblem:
        reply = self._make_request([
            {"role": "system", "content": GENERATE_PROMPT.strip()},
            {"role": "user", "content": f"Generate a {difficulty} level {topic} problem."},
        ])
        try:
            return GeneratedProblem.model_validate_json(extract_json(reply))
        except ValidationError as e:
            raise LLMResponseParseError("Failed to parse generated problem") from e

    def chat_assistance(self, context: str, message: str) -> str:
        return self._make_request([
            {"role": "system", "content": CHAT_PROMPT.format(context=context).strip()},
            {"role": "user", "content": message},
        ])


def build_service(config: Optional[LLMConfig]) -> Optional[LLMService]:
    return LLMService(config) if config is not None else None
