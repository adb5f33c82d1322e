"""
Purpose: Reduce a question string to comparison keys used for duplicate detection.
Why: Model output and synthesized candidates often differ only by boilerplate
("(Focus: X)", "Please be specific.") or by the topic word substituted into the
same sentence. Comparing raw strings would let those through as "new" questions.

Keys:
- exact: fully normalized text (rules below, whitespace collapsed, trailing
  sentence punctuation stripped, lowercased).
- opener: first three words of `exact`.
- stem: first six words of `exact` after dropping a trailing
  "related to / about / with / involving / regarding ..." tail.

The normalization is an ordered table of named rules so new boilerplate
patterns can be added without touching the others. Each rule is a pure
str -> str step and is tested on its own.

Testing: Each rule independently, then `canonicalize` fixed-point behavior.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Union

from ..models import CanonicalKeys

OPENER_WORDS = 3
STEM_WORDS = 6


@dataclass(frozen=True)
class NormalizationRule:
    name: str
    pattern: re.Pattern
    replacement: str = " "

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _rule(name: str, pattern: str, replacement: str = " ") -> NormalizationRule:
    return NormalizationRule(name, re.compile(pattern, re.IGNORECASE), replacement)


NORMALIZATION_RULES: tuple[NormalizationRule, ...] = (
    _rule("focus_hint", r"\(\s*focus\s*:[^)]*\)"),
    # Only a trailing clause: needs at least one non-space character before it.
    _rule(
        "trailing_instruction",
        r"(?<=\S)[\s,;:.\-]+(?:please\s+focus\s+on|focusing\s+on|focused\s+on"
        r"|please|see\s+the\s+question)\b.*$",
        "",
    ),
    _rule("jd_emphasis_lead", r"^\s*based\s+on\s+the\s+jd(?:'s)?\s+emphasis\s+on\s+[^,]*,\s*", ""),
    _rule("repeated_noun", r"\b(\w+)\s+and\s+working\s+with\s+\1\b", r"\1"),
    _rule("heavy_workloads", r"\bscales\s+for\s+heavy\s+.+?\s+workloads\b", "scales for heavy workloads"),
    _rule("heavy_work", r"\b[\w.+#-]+-heavy\s+work\b", "heavy work"),
)

_WS = re.compile(r"\s+")
_TRAILING_PUNCT = re.compile(r"[\s?.!;:,…]+$")
_STEM_TAIL = re.compile(r"\s+(?:related\s+to|about|with|involving|regarding)\b.*$")


def normalize(text: str, rules: tuple[NormalizationRule, ...] = NORMALIZATION_RULES) -> str:
    """Apply the rule table, then collapse whitespace, strip trailing punctuation, lowercase."""
    out = str(text or "")
    for rule in rules:
        out = rule.apply(out)
    out = _WS.sub(" ", out).strip()
    out = _TRAILING_PUNCT.sub("", out)
    return out.lower()


def _first_words(text: str, n: int) -> str:
    return " ".join(text.split()[:n])


def canonicalize(question: Union[str, CanonicalKeys]) -> CanonicalKeys:
    if isinstance(question, CanonicalKeys):
        question = question.exact
    exact = normalize(question)
    stem_source = _STEM_TAIL.sub("", exact)
    return CanonicalKeys(
        exact=exact,
        opener=_first_words(exact, OPENER_WORDS),
        stem=_first_words(stem_source, STEM_WORDS),
    )


def exact_key(question: str) -> str:
    return canonicalize(question).exact
