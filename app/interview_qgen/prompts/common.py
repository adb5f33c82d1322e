"""Shared prompt helpers used across prompt modules."""

from __future__ import annotations
from textwrap import dedent
from typing import Optional, Sequence

from ..models import InterviewStage


def stage_rules(stage: InterviewStage) -> str:
    if stage == InterviewStage.INITIAL_INTERVIEW:
        return (
            "Initial interview stage.\n"
            "- Skill-based, role-relevant and scenario-based questions.\n"
            "- Focus on relevant experience, problem-solving, work style "
            "and role-specific scenarios.\n"
        )
    if stage == InterviewStage.TECHNICAL:
        return (
            "Technical interview stage.\n"
            "- In-depth technical or domain-specific questions.\n"
            "- Focus on technical skills, system design, debugging, performance "
            "and technical decision-making.\n"
        )
    if stage == InterviewStage.BEHAVIORAL:
        return (
            "Behavioral interview stage.\n"
            "- Soft skills, teamwork and conflict resolution.\n"
            "- Focus on leadership, communication, influence, adaptability "
            "and cultural fit.\n"
        )
    return (
        "Screening stage.\n"
        "- Basic qualification, work experience and general fit.\n"
        "- Focus on qualifications, availability, motivation and company knowledge.\n"
    )


def skills_block(skills: Optional[Sequence[str]]) -> str:
    if not skills:
        return ""
    lines = [f"- {s}" for s in skills if str(s).strip()]
    if not lines:
        return ""
    return "\nFOCUS SKILLS:\n" + "\n".join(lines) + "\n"


def prior_questions_block(
    prior: Optional[Sequence[str]], *, max_items: int = 30
) -> str:
    if not prior:
        return ""
    lines = [f"- {q}" for q in list(prior)[:max_items]]
    return (
        "\nALREADY ASKED (do not repeat or rephrase these):\n" + "\n".join(lines) + "\n"
    )


def output_format_block(count: int) -> str:
    return dedent(
        f"""\
        OUTPUT FORMAT:
        Generate exactly {count} questions in this format:
        Q1: <question>
        Q2: <question>
        ...
        Q{count}: <question>

        Only provide the questions, no explanations or additional text.
        """
    )


def jd_block(job_description: str, *, max_chars: int = 6000) -> str:
    text = (job_description or "").strip()
    if not text:
        return "JOB DESCRIPTION: not provided."
    return f"JOB DESCRIPTION:\n{text[:max_chars]}"
