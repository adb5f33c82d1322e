"""
Purpose: Ask a language model for primary question candidates.
Why: Model questions read better than templates; the backfill engine then
dedupes them and tops up any shortfall. Any failure here is reported as
QuestionSourceError so the caller can fall through to synthesis.
"""

from __future__ import annotations
import logging
import re
from typing import Optional

from ..interfaces import LLMClient, PromptFactory
from ..models import GenerationRequest, LLMSettings
from ..prompts import DefaultPromptFactory
from ..utils.llm_json import extract_json, string_items

logger = logging.getLogger(__name__)

_Q_LINE = re.compile(r"^\s*\**\s*Q\s*\d+\s*\**\s*[:.)\-]\s*\**\s*(.+?)\s*$", re.IGNORECASE)
_NUMBERED = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s+(.+?)\s*$")


class QuestionSourceError(RuntimeError):
    """The upstream question source failed, timed out, or returned nothing usable."""


def parse_question_lines(text: str) -> list[str]:
    """
    Accept `Q1: ...` lines (the requested format), then numbered or bulleted
    lines, then a JSON array (or {"questions": [...]}) as a last resort.
    """
    lines = (text or "").splitlines()
    found = [m.group(1) for m in map(_Q_LINE.match, lines) if m]
    if not found:
        found = [m.group(1) for m in map(_NUMBERED.match, lines) if m]
    if not found:
        found = string_items(extract_json(text))
    return [q.strip().strip('"').strip() for q in found if q.strip().strip('"').strip()]


def request_model_questions(
    request: GenerationRequest,
    llm: LLMClient,
    settings: LLMSettings,
    *,
    prompts: Optional[PromptFactory] = None,
    job_description: Optional[str] = None,
) -> tuple[list[str], dict]:
    """
    Returns (questions, meta). `job_description` overrides the request text
    in the prompt (e.g. a redacted copy). Raises QuestionSourceError.
    """
    prompts = prompts or DefaultPromptFactory()
    system = prompts.build_question_system()
    user = prompts.question_generation_instruction(
        job_description=request.job_description if job_description is None else job_description,
        stage=request.stage,
        count=request.target_count,
        skills=request.skills,
        prior_questions=request.prior_questions,
    )
    try:
        text, meta = llm.chat(
            messages=[{"role": "user", "content": user}],
            settings=settings,
            system=system,
        )
    except Exception as e:
        raise QuestionSourceError(f"question model call failed: {e}") from e

    questions = parse_question_lines(text)
    if not questions:
        raise QuestionSourceError("question model returned no parseable questions")
    logger.debug("model returned %d candidate questions", len(questions))
    return questions, meta or {}
