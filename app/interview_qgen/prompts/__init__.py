"""Facade that preserves the DefaultPromptFactory API."""

from __future__ import annotations
from typing import Optional, Sequence

from ..models import InterviewStage
from . import questions as _questions


class DefaultPromptFactory:
    # QUESTION GENERATION
    def build_question_system(self) -> str:
        return _questions.build_question_system()

    def question_generation_instruction(
        self,
        *,
        job_description: str,
        stage: InterviewStage,
        count: int,
        skills: Optional[Sequence[str]] = None,
        prior_questions: Optional[Sequence[str]] = None,
    ) -> str:
        return _questions.question_generation_instruction(
            job_description=job_description,
            stage=stage,
            count=count,
            skills=skills,
            prior_questions=prior_questions,
        )
