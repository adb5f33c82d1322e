"""
Purpose: The single orchestration point for a question-generation request.
Keeps the UI (or any request handler) from knowing how prompts/LLM/services work.

Key responsibilities:
- Sanitize and cap the job description (services.security).
- Optionally ask the LLM (via LLMClient interface) for primary candidates.
- Treat any upstream failure/timeout as "no primary candidates".
- Run the shared uniqueness/backfill engine (services.question_generator).
- Return (questions, meta) where meta carries source, shortfall and token usage.
- Accumulate token counters across calls; reset() clears them.

Testing: Pure unit tests with fakes: fake LLMClient that returns canned text,
raises, or times out. No network calls.
"""

from __future__ import annotations
import logging
from typing import Any, Mapping, Optional, Sequence, Union

from .config import AppConfig, DEFAULT_MODEL, DEFAULT_POOL_MULTIPLIER
from .interfaces import LLMClient, PromptFactory, SecurityGuard
from .models import GenerationMeta, GenerationRequest, LLMSettings
from .prompts import DefaultPromptFactory
from .services.llm_openai import OpenAILLMClient
from .services.model_questions import QuestionSourceError, request_model_questions
from .services.pricing import estimate_cost, estimate_generation_usage
from .services.question_generator import filter_questions, generate_questions
from .services.security import DefaultSecurity

logger = logging.getLogger(__name__)


class QuestionGenerationController:
    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        *,
        model: str = DEFAULT_MODEL,
        pool_multiplier: int = DEFAULT_POOL_MULTIPLIER,
    ):
        self.llm: Optional[LLMClient] = llm
        self.prompts: PromptFactory = DefaultPromptFactory()
        self.security: SecurityGuard = DefaultSecurity()
        self.model = model
        self.pool_multiplier = pool_multiplier

        self.tokens_in: int = 0
        self.tokens_out: int = 0
        self.model_used: Optional[str] = None

    @classmethod
    def from_config(cls, config: AppConfig) -> "QuestionGenerationController":
        """Build with an OpenAI client when a key is configured, else synthesis only."""
        llm = None
        if config.has_model:
            try:
                llm = OpenAILLMClient(
                    config.openai_api_key, timeout=config.timeout_seconds
                )
            except RuntimeError as e:
                logger.warning("LLM unavailable, using template synthesis only: %s", e)
        return cls(llm, model=config.model, pool_multiplier=config.pool_multiplier)

    def has_model(self) -> bool:
        """True if a model is configured as the primary question source."""
        return self.llm is not None

    def reset(self) -> None:
        """Clear token counters."""
        self.tokens_in = self.tokens_out = 0
        self.model_used = None

    def _prepare(self, request: GenerationRequest) -> GenerationRequest:
        jd = self.security.sanitize_for_prompt(request.job_description)
        jd = self.security.validate_job_description_length(jd)
        if jd == request.job_description:
            return request
        return GenerationRequest(
            job_description=jd,
            stage=request.stage,
            target_count=request.target_count,
            skills=request.skills,
            prior_questions=request.prior_questions,
        )

    def _primary_candidates(
        self, request: GenerationRequest, settings: LLMSettings, meta: GenerationMeta
    ) -> Optional[list[str]]:
        if self.llm is None or request.target_count <= 0:
            return None
        if self.security.has_prompt_injection(request.job_description):
            logger.warning("job description contains prompt-injection cues; skipping model")
            meta.notes.append("model skipped: prompt-injection cues in job description")
            return None

        redacted, found = self.security.redact_pii(request.job_description)
        if found:
            meta.notes.append(f"redacted from prompt: {', '.join(found)}")
        try:
            questions, llm_meta = request_model_questions(
                request,
                self.llm,
                settings,
                prompts=self.prompts,
                job_description=redacted,
            )
        except QuestionSourceError as e:
            logger.warning("falling back to synthesized questions: %s", e)
            meta.notes.append("model unavailable; synthesized questions used")
            return None

        meta.model = llm_meta.get("model") or settings.model
        if llm_meta.get("usage_reported", True):
            meta.tokens_in = int(llm_meta.get("tokens_in", 0))
            meta.tokens_out = int(llm_meta.get("tokens_out", 0))
            meta.estimated = False
        return questions

    def generate(
        self,
        request: Union[GenerationRequest, Mapping[str, Any]],
        *,
        settings: Optional[LLMSettings] = None,
    ) -> tuple[list[str], dict]:
        """
        One request: optional model call, then dedupe/backfill.
        Never raises for malformed input; a short list means exhaustion.
        """
        if not isinstance(request, GenerationRequest):
            request = GenerationRequest.from_payload(request)
        request = self._prepare(request)
        use_settings = settings or LLMSettings(
            model=self.model, temperature=0.7, top_p=1.0, max_tokens=1200
        )

        meta = GenerationMeta(requested=request.target_count)
        primary = self._primary_candidates(request, use_settings, meta)
        questions = generate_questions(
            request, primary, pool_multiplier=self.pool_multiplier
        )
        meta.returned = len(questions)

        primary_texts = {" ".join(p.split()) for p in primary or []}
        from_model = sum(1 for q in questions if q in primary_texts)
        if from_model == 0:
            meta.source = "synthesized"
        else:
            meta.source = "model" if from_model == len(questions) else "mixed"

        if meta.estimated:
            meta.tokens_in, meta.tokens_out = estimate_generation_usage(
                request.job_description, request.target_count, meta.returned
            )
        meta.cost_usd = (
            estimate_cost(meta.model, meta.tokens_in, meta.tokens_out) if meta.model else 0.0
        )

        self.tokens_in += meta.tokens_in
        self.tokens_out += meta.tokens_out
        if meta.model:
            self.model_used = meta.model
        return questions, meta.as_dict()

    def filter_questions(
        self,
        candidates: Sequence[str],
        request: Union[GenerationRequest, Mapping[str, Any]],
    ) -> list[str]:
        """Client-side post-filter: the same dedupe rules, no synthesis."""
        if not isinstance(request, GenerationRequest):
            request = GenerationRequest.from_payload(request)
        return filter_questions(candidates, request)
