"""
Canonical data shapes, shared truth for typing/validation between layers.

Typical contents:
- InterviewStage (which template pool / prompt focus is used).
- GenerationRequest (job description, stage, target count, skills, prior questions).
- KeywordPool (ordered terms + role label derived from the JD).
- CanonicalKeys (exact / opener / stem comparison keys of one question).
- LLMSettings, Price.

Testing: Mostly types. `resolve_stage` and `GenerationRequest.from_payload`
are lenient parsers and never raise.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping, Optional


class InterviewStage(str, Enum):
    SCREENING = "Screening"
    INITIAL_INTERVIEW = "Initial Interview"
    TECHNICAL = "Technical"
    BEHAVIORAL = "Behavioral"


_STAGE_ALIASES: dict[str, InterviewStage] = {
    "screening": InterviewStage.SCREENING,
    "screening agent": InterviewStage.SCREENING,
    "screen": InterviewStage.SCREENING,
    "initial": InterviewStage.INITIAL_INTERVIEW,
    "initial interview": InterviewStage.INITIAL_INTERVIEW,
    "initial interview agent": InterviewStage.INITIAL_INTERVIEW,
    "technical": InterviewStage.TECHNICAL,
    "technical interview": InterviewStage.TECHNICAL,
    "technical interview agent": InterviewStage.TECHNICAL,
    "technical agent": InterviewStage.TECHNICAL,
    "behavioral": InterviewStage.BEHAVIORAL,
    "behavioural": InterviewStage.BEHAVIORAL,
    "behavioral interview": InterviewStage.BEHAVIORAL,
    "behavioral interview agent": InterviewStage.BEHAVIORAL,
}

# Evaluation-criteria labels as configured on interview rounds.
_CRITERIA_CUES: list[tuple[str, InterviewStage]] = [
    ("technical", InterviewStage.TECHNICAL),
    ("problem", InterviewStage.TECHNICAL),
    ("coding", InterviewStage.TECHNICAL),
    ("system design", InterviewStage.TECHNICAL),
    ("domain", InterviewStage.TECHNICAL),
    ("communication", InterviewStage.BEHAVIORAL),
    ("team", InterviewStage.BEHAVIORAL),
    ("collaboration", InterviewStage.BEHAVIORAL),
    ("leadership", InterviewStage.BEHAVIORAL),
    ("culture", InterviewStage.BEHAVIORAL),
    ("conflict", InterviewStage.BEHAVIORAL),
    ("adaptab", InterviewStage.BEHAVIORAL),
    ("role fit", InterviewStage.INITIAL_INTERVIEW),
    ("prioriti", InterviewStage.INITIAL_INTERVIEW),
    ("work style", InterviewStage.INITIAL_INTERVIEW),
    ("scenario", InterviewStage.INITIAL_INTERVIEW),
    ("experience", InterviewStage.SCREENING),
    ("qualification", InterviewStage.SCREENING),
    ("availability", InterviewStage.SCREENING),
    ("salary", InterviewStage.SCREENING),
    ("motivation", InterviewStage.SCREENING),
]


def _stage_for_label(label: str) -> Optional[InterviewStage]:
    key = " ".join(label.strip().lower().split())
    if not key:
        return None
    if key in _STAGE_ALIASES:
        return _STAGE_ALIASES[key]
    for cue, stage in _CRITERIA_CUES:
        if cue in key:
            return stage
    return None


def resolve_stage(value: Any) -> InterviewStage:
    """
    Map a stage enum, agent name, loose stage string or evaluation-criteria
    label(s) onto an InterviewStage. Unknown input resolves to SCREENING.
    """
    if isinstance(value, InterviewStage):
        return value
    if isinstance(value, str):
        return _stage_for_label(value) or InterviewStage.SCREENING
    if isinstance(value, Iterable):
        votes: list[InterviewStage] = []
        for item in value:
            if isinstance(item, InterviewStage):
                votes.append(item)
            elif isinstance(item, str):
                stage = _stage_for_label(item)
                if stage is not None:
                    votes.append(stage)
        if votes:
            counts = Counter(votes)
            best = max(counts.values())
            # Counter keeps first-seen order, so ties go to the earliest label.
            return next(s for s, c in counts.items() if c == best)
    return InterviewStage.SCREENING


def normalize_text_list(values: Any) -> list[str]:
    """
    Accepts a str (newline/comma separated) or an iterable of str.
    Returns trimmed items, de-duplicated case-insensitively in order.
    """
    items: list[str] = []
    if isinstance(values, str):
        raw = values.replace(",", "\n")
        items = [ln.strip() for ln in raw.splitlines() if ln.strip()]
    elif isinstance(values, Iterable):
        items = [str(x).strip() for x in values if x is not None and str(x).strip()]

    seen = set()
    out = []
    for it in items:
        if it.lower() in seen:
            continue
        out.append(it)
        seen.add(it.lower())
    return out


def normalize_question_list(values: Any) -> list[str]:
    """Like `normalize_text_list` but never splits on commas (questions contain them)."""
    if isinstance(values, str):
        values = values.splitlines()
    if not isinstance(values, Iterable):
        return []
    return [str(x).strip() for x in values if x is not None and str(x).strip()]


def _coerce_count(value: Any) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return 0
    return max(0, n)


@dataclass(frozen=True)
class GenerationRequest:
    job_description: str = ""
    stage: InterviewStage = InterviewStage.SCREENING
    target_count: int = 5
    skills: tuple[str, ...] = ()
    prior_questions: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        job_description: Optional[str],
        stage: Any = InterviewStage.SCREENING,
        target_count: Any = 5,
        skills: Any = None,
        prior_questions: Any = None,
    ) -> "GenerationRequest":
        return cls(
            job_description=str(job_description or ""),
            stage=resolve_stage(stage),
            target_count=_coerce_count(target_count),
            skills=tuple(normalize_text_list(skills or [])),
            prior_questions=tuple(normalize_question_list(prior_questions or [])),
        )

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "GenerationRequest":
        """Build from a handler payload using either camelCase or snake_case keys."""
        data = dict(payload or {})

        def pick(*keys: str, default: Any = None) -> Any:
            for k in keys:
                if data.get(k) is not None:
                    return data[k]
            return default

        return cls.create(
            job_description=pick("jobDescription", "job_description", default=""),
            stage=pick("agentType", "stage", "criteria", default=InterviewStage.SCREENING),
            target_count=pick("numberOfQuestions", "target_count", "count", default=5),
            skills=pick("skills", default=[]),
            prior_questions=pick(
                "existingQuestions", "prior_questions", "priorQuestions", default=[]
            ),
        )


@dataclass(frozen=True)
class KeywordPool:
    terms: tuple[str, ...]
    role: str = "the role"

    def __len__(self) -> int:
        return len(self.terms)


@dataclass(frozen=True)
class CanonicalKeys:
    exact: str
    opener: str
    stem: str


@dataclass
class LLMSettings:
    model: str
    temperature: float = 0.7
    top_p: float = 1.0
    max_tokens: int = 512
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    response_format: Optional[dict] = None


@dataclass(frozen=True)
class Price:
    input_per_1M: float
    output_per_1M: float


@dataclass
class GenerationMeta:
    source: str = "synthesized"
    requested: int = 0
    returned: int = 0
    tokens_in: int = 0
    tokens_out: int = 0
    estimated: bool = True
    model: Optional[str] = None
    cost_usd: float = 0.0
    notes: list[str] = field(default_factory=list)

    @property
    def shortfall(self) -> int:
        return max(0, self.requested - self.returned)

    def as_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "requested": self.requested,
            "returned": self.returned,
            "shortfall": self.shortfall,
            "tokens_in": self.tokens_in,
            "tokens_out": self.tokens_out,
            "estimated": self.estimated,
            "model": self.model,
            "cost_usd": self.cost_usd,
            "notes": list(self.notes),
        }
