"""
Purpose: Turn a free-text job description into substitutable keywords.
Why: Templates need topical content; frequency over the JD is cheap, local and
deterministic (no model call needed).

What is inside:
extract_keywords(jd, skills) -> list[str]
derive_role(jd, frequency_terms) -> str
build_keyword_pool(jd, skills) -> KeywordPool
extract_pdf_text(file_like) -> str   (JD upload in the UI)

Testing: Pure functions; fixed inputs give fixed pools.
"""

from __future__ import annotations
import logging
import re
from collections import Counter
from typing import Iterable, Optional

from pypdf import PdfReader

from ..models import KeywordPool, normalize_text_list

logger = logging.getLogger(__name__)

MAX_FREQUENCY_TERMS = 10
MIN_TOKEN_LENGTH = 3
MAX_ROLE_CHARS = 80
DEFAULT_KEYWORDS = ("experience", "skills", "project")
DEFAULT_ROLE = "the role"

STOPWORDS = frozenset(
    """
    the and for with a an of to in on at by as is are be or from this that these those
    you we our your us they them their it its he she his her who whom whose which what
    when where why how will would can could should may might must shall into over under
    about above below after before than then also not but nor yet so such both either
    each all any some more most other own same very just only too out off per via etc
    was were been being have has had having do does did doing
    need needs looking seeking join ideal candidate candidates strong able ability
    including include includes within across well plus
    """.split()
)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_ROLE_LINE = re.compile(r"\b(?:role|position|title)\s*[:\-–]\s*([^\n.;|]+)", re.IGNORECASE)


def tokenize(text: str) -> list[str]:
    """Lowercase, non-alphanumerics to spaces, drop short tokens and stopwords."""
    words = _NON_ALNUM.sub(" ", (text or "").lower()).split()
    return [w for w in words if len(w) >= MIN_TOKEN_LENGTH and w not in STOPWORDS]


def frequency_terms(text: str, limit: int = MAX_FREQUENCY_TERMS) -> list[str]:
    """Top `limit` tokens by count; ties keep first-seen order."""
    counts = Counter(tokenize(text))
    ranked = sorted(counts.items(), key=lambda kv: -kv[1])
    return [w for w, _ in ranked[:limit]]


def _merge(skills: Iterable[str], terms: Iterable[str]) -> list[str]:
    out: list[str] = []
    seen = set()
    for raw in list(skills) + list(terms):
        term = " ".join(str(raw).lower().split())
        if not term or term in seen:
            continue
        out.append(term)
        seen.add(term)
    return out


def extract_keywords(job_description: str, skills: Optional[Iterable[str]] = None) -> list[str]:
    """
    Skill terms first (order kept), then JD frequency terms not already present.
    Falls back to DEFAULT_KEYWORDS when both are empty.
    """
    return list(build_keyword_pool(job_description, skills).terms)


def derive_role(job_description: str, terms: Optional[list[str]] = None) -> str:
    """'Role:/Position:/Title:' line, else the top frequency term, else 'the role'."""
    m = _ROLE_LINE.search(job_description or "")
    if m:
        role = " ".join(m.group(1).split()).strip(" ,-–")
        if role:
            return role[:MAX_ROLE_CHARS].rstrip()
    if terms is None:
        terms = frequency_terms(job_description)
    return terms[0] if terms else DEFAULT_ROLE


def build_keyword_pool(
    job_description: str, skills: Optional[Iterable[str]] = None
) -> KeywordPool:
    terms = frequency_terms(job_description)
    keywords = _merge(normalize_text_list(skills or []), terms) or list(DEFAULT_KEYWORDS)
    pool = KeywordPool(terms=tuple(keywords), role=derive_role(job_description, terms))
    logger.debug("keyword pool: %d terms, role=%r", len(pool), pool.role)
    return pool


def extract_pdf_text(file_like) -> str:
    try:
        reader = PdfReader(file_like)
        parts = []
        for page in reader.pages:
            try:
                txt = page.extract_text() or ""
            except Exception:
                txt = ""
            if txt.strip():
                parts.append(txt)
        return "\n\n".join(parts).strip()
    except Exception:
        logger.warning("could not read PDF job description", exc_info=True)
        return ""
