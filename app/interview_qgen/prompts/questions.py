"""Question-generation prompts (system + per-request instruction)."""

from __future__ import annotations
from textwrap import dedent
from typing import Optional, Sequence

from ..models import InterviewStage
from .common import (
    stage_rules,
    skills_block,
    prior_questions_block,
    output_format_block,
    jd_block,
)


def build_question_system() -> str:
    return (
        "You are an AI Interview Question Generator for an automated hiring platform. "
        "Generate relevant, clear, and role-specific interview questions based on "
        "the job description and interview stage."
    )


def question_generation_instruction(
    *,
    job_description: str,
    stage: InterviewStage,
    count: int,
    skills: Optional[Sequence[str]] = None,
    prior_questions: Optional[Sequence[str]] = None,
) -> str:
    core = dedent(
        f"""\
        {jd_block(job_description)}

        INTERVIEW STAGE: {stage.value}
        NUMBER OF QUESTIONS REQUIRED: {count}

        INSTRUCTIONS:
        - Read the JD carefully and extract the key skills, requirements, and responsibilities.
        - Ensure the questions are:
          1. Directly related to the role
          2. Clear, concise, and easy to understand
          3. Unique (no repetition, no rephrasings of each other)
          4. Suitable for the given interview stage
        """
    )
    return (
        core
        + "\n"
        + stage_rules(stage)
        + skills_block(skills)
        + prior_questions_block(prior_questions)
        + "\n"
        + output_format_block(count)
    )
