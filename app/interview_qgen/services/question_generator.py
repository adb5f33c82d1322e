"""
Purpose: Produce up to N unique interview questions for a request.
Why: Both call sites (the controller after a model call, and any post-filter of
model output) must apply identical duplicate rules, so they share this one
pure function.

Flow:
Seeding -> PrimaryFilter -> Pass 1 (strict) -> Pass 2 (relaxed stem)
-> Pass 3 (exact only) -> Done

- Seeding: exact keys of prior questions are rejected up front.
- PrimaryFilter: externally supplied candidates (e.g. model output), in order,
  under the strict rule.
- Pass 1: synthesized pool of target x 8; exact, opener AND stem must be new.
- Pass 2: fresh pool; exact and opener must be new.
- Pass 3: fresh pool; exact must be new.
- Done: at most `target_count` items. A short list means the candidate space
  was exhausted; duplicates are never invented to fill it.

Testing: Deterministic for fixed inputs. No state survives a call.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional, Sequence

from ..models import CanonicalKeys, GenerationRequest, InterviewStage
from .canonicalizer import canonicalize
from .jd_analyzer import build_keyword_pool
from .seeded_random import MASK32, seed_from
from .templates import synthesize

logger = logging.getLogger(__name__)

POOL_MULTIPLIER = 8
_PASS_SALT = 0x9E3779B9


class AcceptMode(str, Enum):
    STRICT = "strict"
    RELAXED_STEM = "relaxed_stem"
    EXACT_ONLY = "exact_only"


BACKFILL_PASSES = (AcceptMode.STRICT, AcceptMode.RELAXED_STEM, AcceptMode.EXACT_ONLY)


@dataclass
class RejectionSets:
    seen_exact: set[str] = field(default_factory=set)
    used_opener: set[str] = field(default_factory=set)
    used_stem: set[str] = field(default_factory=set)

    @classmethod
    def from_prior(cls, prior_questions: Iterable[str]) -> "RejectionSets":
        sets = cls()
        for q in prior_questions:
            exact = canonicalize(q).exact
            if exact:
                sets.seen_exact.add(exact)
        return sets

    def accepts(self, keys: CanonicalKeys, mode: AcceptMode) -> bool:
        if not keys.exact or keys.exact in self.seen_exact:
            return False
        if mode is AcceptMode.EXACT_ONLY:
            return True
        if keys.opener in self.used_opener:
            return False
        if mode is AcceptMode.RELAXED_STEM:
            return True
        return keys.stem not in self.used_stem

    def add(self, keys: CanonicalKeys) -> None:
        self.seen_exact.add(keys.exact)
        self.used_opener.add(keys.opener)
        self.used_stem.add(keys.stem)


def pass_seed(seed: int, pass_index: int) -> int:
    """Distinct, reproducible shuffle seed for each backfill pass (index 0 is `seed`)."""
    return (seed + pass_index * _PASS_SALT) & MASK32


def _accept_from(
    candidates: Iterable[str],
    sets: RejectionSets,
    mode: AcceptMode,
    accepted: list[str],
    target: int,
) -> int:
    added = 0
    for raw in candidates:
        if len(accepted) >= target:
            break
        text = " ".join(str(raw or "").split())
        if not text:
            continue
        keys = canonicalize(text)
        if sets.accepts(keys, mode):
            accepted.append(text)
            sets.add(keys)
            added += 1
    return added


def generate_questions(
    request: GenerationRequest,
    primary_candidates: Optional[Sequence[str]] = None,
    *,
    backfill: bool = True,
    pool_multiplier: int = POOL_MULTIPLIER,
    templates: Optional[Mapping[InterviewStage, Sequence[str]]] = None,
) -> list[str]:
    """
    Return <= request.target_count questions, unique by canonical keys among
    themselves and against request.prior_questions. Never raises for
    degenerate input; an exhausted candidate space gives a short list.
    """
    target = max(0, int(request.target_count or 0))
    if target == 0:
        return []

    sets = RejectionSets.from_prior(request.prior_questions)
    accepted: list[str] = []

    if primary_candidates:
        added = _accept_from(primary_candidates, sets, AcceptMode.STRICT, accepted, target)
        logger.debug("primary filter accepted %d of %d", added, len(primary_candidates))

    if backfill and len(accepted) < target:
        pool = build_keyword_pool(request.job_description, request.skills)
        seed = seed_from(request.job_description)
        size = target * max(1, pool_multiplier)
        for index, mode in enumerate(BACKFILL_PASSES):
            if len(accepted) >= target:
                break
            candidates = synthesize(
                request.stage,
                pool.terms,
                pool.role,
                size,
                seed=pass_seed(seed, index),
                templates=templates,
            )
            added = _accept_from(candidates, sets, mode, accepted, target)
            logger.debug(
                "backfill pass %d (%s): %d accepted from %d candidates",
                index + 1,
                mode.value,
                added,
                len(candidates),
            )

    if len(accepted) < target:
        logger.info(
            "candidate space exhausted: returning %d of %d requested %s questions",
            len(accepted),
            target,
            request.stage.value,
        )
    return accepted[:target]


def filter_questions(
    candidates: Sequence[str], request: GenerationRequest
) -> list[str]:
    """Post-filter only: dedupe `candidates` against the request, no synthesis."""
    return generate_questions(request, candidates, backfill=False)
