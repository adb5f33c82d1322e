import pytest

from interview_qgen.models import GenerationRequest, InterviewStage

BACKEND_JD = (
    "We need a backend engineer strong in Kafka and PostgreSQL, "
    "building resilient microservices."
)


def _conversation(messages, system):
    return ([{"role": "system", "content": system}] if system else []) + list(messages)


class FakeLLM:
    """Returns canned text and records every call as the full conversation sent."""

    def __init__(self, text: str = "", meta: dict | None = None):
        self.text = text
        self.meta = meta if meta is not None else {
            "model": "gpt-4o",
            "tokens_in": 120,
            "tokens_out": 80,
        }
        self.calls: list[list[dict]] = []
        self.systems: list[str | None] = []

    def chat(self, messages, settings, system=None):
        self.calls.append(_conversation(messages, system))
        self.systems.append(system)
        return self.text, dict(self.meta)


class FailingLLM:
    def __init__(self, exc: Exception):
        self.exc = exc
        self.calls = 0

    def chat(self, messages, settings, system=None):
        self.calls += 1
        raise self.exc


@pytest.fixture
def backend_request() -> GenerationRequest:
    return GenerationRequest.create(
        job_description=BACKEND_JD,
        stage=InterviewStage.TECHNICAL,
        target_count=5,
        skills=["kafka", "postgresql"],
    )
