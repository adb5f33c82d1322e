"""
Abstractions for pluggable services. Inversion of control: the controller
depends on interfaces, not concrete services. Enables fakes/mocks and future swaps.
Protocols define what services or components can do,
without saying how they do it.

Common protocols:
- LLMClient.chat(messages, settings) -> (reply, meta)
- PromptFactory.build_question_system() / question_generation_instruction(...)
- SecurityGuard.sanitize_for_prompt(text) / validate_job_description_length(text)

Testing: Use simple fake implementations to test the controller without network calls.
"""

from __future__ import annotations
from typing import Optional, Protocol, Sequence
from .models import LLMSettings, InterviewStage


class LLMClient(Protocol):
    def chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        system: Optional[str] = None,
    ) -> tuple[str, dict]: ...


class PromptFactory(Protocol):
    def build_question_system(self) -> str: ...

    def question_generation_instruction(
        self,
        *,
        job_description: str,
        stage: InterviewStage,
        count: int,
        skills: Optional[Sequence[str]] = None,
        prior_questions: Optional[Sequence[str]] = None,
    ) -> str: ...


class SecurityGuard(Protocol):
    def validate_job_description_length(self, text: str) -> str: ...

    def sanitize_for_prompt(self, text: str) -> str: ...

    def redact_pii(self, text: str) -> tuple[str, list[str]]: ...

    def has_prompt_injection(self, text: str) -> bool: ...
