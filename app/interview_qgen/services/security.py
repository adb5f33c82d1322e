"""
Purpose: Guardrails for job-description text before it reaches a model prompt.
A pasted JD is untrusted: it can be huge, carry recruiter contact details, or
hold text aimed at the model instead of the candidate.
Nothing here raises; the controller decides what each finding means.
"""

import re

MAX_JD_CHARS = 10000

# SSN runs before PHONE; the phone pattern also matches SSNs.
PII_PATTERNS = (
    ("EMAIL", re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.I)),
    ("SSN", re.compile(r"\b\d{3}-\d{2}-\d{4}\b")),
    ("PHONE", re.compile(r"\+?\d[\d\s().-]{7,}\d")),
)

INJECTION_CUES = (
    "ignore previous",
    "ignore all previous",
    "ignore the above",
    "disregard previous",
    "disregard the above",
    "system prompt",
    "as the assistant",
    "you must not follow",
    "new instructions:",
    "### system",
    "begin system",
)

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


class DefaultSecurity:
    def validate_job_description_length(self, text: str) -> str:
        """Over-long text is cut to MAX_JD_CHARS, never rejected."""
        return text[:MAX_JD_CHARS]

    def sanitize_for_prompt(self, text: str) -> str:
        return _CONTROL_CHARS.sub("", text or "").strip()

    def redact_pii(self, text: str) -> tuple[str, list[str]]:
        found = []
        for label, rx in PII_PATTERNS:
            text, hits = rx.subn(f"[{label}]", text)
            if hits:
                found.append(label)
        return text, found

    def has_prompt_injection(self, text: str) -> bool:
        flat = " ".join((text or "").lower().split())
        return any(cue in flat for cue in INJECTION_CUES)
