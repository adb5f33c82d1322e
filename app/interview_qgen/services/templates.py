"""
Purpose: Synthesize interview questions locally from stage templates.
Why: Works with no model at all, and gives the backfill step a large, topical
candidate pool to draw from when model output is short or repetitive.

Each stage owns a pool of sentence templates with `{role}` and `{kw1}`..`{kw3}`
placeholders. Every template is expanded against:
- the leading keywords (one "default" instance),
- every unordered pair of the first 6 keywords,
- every unordered triple from the 5 x 6 x 7 keyword window,
so a handful of templates and keywords yields hundreds of strings. The pool is
then shuffled with the job-description seed, making candidate order (and so
which near-duplicates get dropped first) a function of the JD.

A template needing more keywords than its combination holds borrows the next
pool keyword not already in it, and is skipped when the pool runs out, so no
keyword appears twice in one question.

Testing: Pool contents are deterministic for a given (stage, keywords, role, seed).
"""

from __future__ import annotations
import re
from itertools import combinations
from typing import Mapping, Optional, Sequence

from ..models import InterviewStage
from .seeded_random import shuffle

PAIR_WINDOW = 6
TRIPLE_WINDOW = (5, 6, 7)

STAGE_TEMPLATES: dict[InterviewStage, tuple[str, ...]] = {
    InterviewStage.SCREENING: (
        "Can you summarize your experience relevant to {role} and working with {kw1}?",
        "What attracts you to this opportunity and to our work with {kw1} and {kw2}?",
        "Which requirement around {kw1} do you best satisfy, and why?",
        "What timeline are you targeting to join if selected for {role}, given our focus on {kw1}?",
        "What do you understand about our product or domain related to {kw1} and {kw3}?",
        "Which achievements best demonstrate your fit for work involving {kw1} and {kw2}?",
        "How many years have you worked hands-on with {kw1}, and in what setting?",
        "Are you comfortable with the expectations around {kw1} and {kw2} that come with {role}?",
        "Describe the most recent project where {kw1} was central to your responsibilities.",
    ),
    InterviewStage.INITIAL_INTERVIEW: (
        "Walk me through a project where you applied {kw1} or {kw2}. What was your role and impact?",
        "How would you approach a new requirement in {kw1} with ambiguous scope?",
        "Describe how you prioritize tasks when balancing {kw1}, {kw2} and stakeholder deadlines.",
        "Tell me about a time you unblocked a team on {kw1}. What did you do?",
        "Which part of our {kw1} work do you see as the quickest win in your first 30 days, and how?",
        "What trade-offs did you make in a recent project involving {kw1} and {kw3}?",
        "Explain how you would onboard yourself onto an existing {kw1} codebase or process.",
        "Give an example of a scenario where {kw1} and {kw2} requirements conflicted. How did you decide?",
        "If you stepped into {role}, how would you measure success on {kw1} after three months?",
    ),
    InterviewStage.TECHNICAL: (
        "Design a solution that scales for heavy {kw1} workloads. What architecture would you use and why?",
        "How would you optimize performance in a system built around {kw1} and {kw2}?",
        "Explain your approach to testing and observability for features involving {kw1}.",
        "Walk through a debugging session you led related to {kw1}: root cause and fix.",
        "How do you design data models or APIs for {kw1} that integrate with {kw2}?",
        "What security considerations are critical when handling {kw1} alongside {kw3}?",
        "Describe the failure modes you would plan for when running {kw1} in production.",
        "Compare two approaches to combining {kw1} with {kw2}. When would you pick each?",
        "Which metrics would you monitor first for a {kw1} service, and what thresholds would alert you?",
        "Sketch how you would migrate a legacy component to {kw1} without downtime.",
    ),
    InterviewStage.BEHAVIORAL: (
        "Describe a conflict you resolved on a team working on {kw1}. What was your approach?",
        "Tell me about a time you influenced stakeholders around {kw1} without direct authority.",
        "How do you balance quality vs. speed when delivering {kw1}-heavy work?",
        "Give an example of feedback you received related to {kw1}. How did you act on it?",
        "When priorities changed late in a project related to {kw1}, how did you adapt?",
        "What steps do you take to create alignment across functions for a {kw1} initiative?",
        "Share a situation where you had to learn {kw1} quickly to support your team.",
        "Recall a mistake you made while working on {kw1} and {kw2}. What changed afterwards?",
        "Tell us about a time you mentored a colleague who was new to {kw1}.",
    ),
}

_KW = re.compile(r"\{kw(\d)\}")


def keywords_needed(template: str) -> int:
    return max((int(n) for n in _KW.findall(template)), default=0)


def fill_template(
    template: str, role: str, combo: Sequence[str], pool: Sequence[str] = ()
) -> Optional[str]:
    """
    Substitute `{role}` and `{kwN}`. Missing slots borrow, in order, pool
    keywords not already in `combo`; None when the pool cannot fill them.
    An empty combo fills a lone `{kw1}` with the role.
    """
    out = template.replace("{role}", role)
    need = keywords_needed(template)
    if not combo:
        return _KW.sub(role, out) if need <= 1 else None
    slots = list(combo)
    for kw in pool:
        if len(slots) >= need:
            break
        if kw not in slots:
            slots.append(kw)
    if len(slots) < need:
        return None
    return _KW.sub(lambda m: slots[int(m.group(1)) - 1], out)


def keyword_combinations(keywords: Sequence[str]) -> list[tuple[str, ...]]:
    """Leading-keywords default, then pairs of the first 6, then the 5 x 6 x 7 triples."""
    kws = list(keywords)
    combos: list[tuple[str, ...]] = [tuple(kws[:3])]
    combos.extend(combinations(kws[:PAIR_WINDOW], 2))
    n = len(kws)
    wi, wj, wk = TRIPLE_WINDOW
    for i in range(min(wi, n)):
        for j in range(i + 1, min(wj, n)):
            for k in range(j + 1, min(wk, n)):
                combos.append((kws[i], kws[j], kws[k]))
    return combos


def templates_for(
    stage: InterviewStage,
    templates: Optional[Mapping[InterviewStage, Sequence[str]]] = None,
) -> Sequence[str]:
    table = templates if templates is not None else STAGE_TEMPLATES
    return table.get(stage) or table.get(InterviewStage.SCREENING) or ()


def synthesize(
    stage: InterviewStage,
    keywords: Sequence[str],
    role: str,
    count_hint: Optional[int] = None,
    *,
    seed: int = 0,
    templates: Optional[Mapping[InterviewStage, Sequence[str]]] = None,
) -> list[str]:
    """
    Expand every stage template against every keyword combination, drop literal
    repeats, shuffle with `seed`, and cap at `count_hint` when given.
    """
    combos = keyword_combinations(keywords)
    pool: dict[str, None] = {}
    for template in templates_for(stage, templates):
        for combo in combos:
            text = fill_template(template, role, combo, keywords)
            if text is not None:
                pool.setdefault(text, None)

    shuffled = shuffle(list(pool), seed)
    if count_hint is not None and count_hint > 0:
        return shuffled[:count_hint]
    return shuffled
