from interview_qgen.services.jd_analyzer import (
    DEFAULT_KEYWORDS,
    build_keyword_pool,
    derive_role,
    extract_keywords,
    frequency_terms,
    tokenize,
)

from conftest import BACKEND_JD


def test_tokenize_drops_short_tokens_stopwords_and_punctuation():
    assert tokenize("The Kafka-based API, for us!") == ["kafka", "based", "api"]


def test_frequency_terms_rank_by_count_then_first_seen():
    text = "python python django rest api python django"
    assert frequency_terms(text) == ["python", "django", "rest", "api"]


def test_frequency_terms_capped_at_ten():
    text = " ".join(f"term{i:02d}" for i in range(15))
    assert len(frequency_terms(text)) == 10


def test_skills_first_then_frequency_terms():
    keywords = extract_keywords(BACKEND_JD, ["Kafka", " PostgreSQL ", "kafka"])
    assert keywords == [
        "kafka",
        "postgresql",
        "backend",
        "engineer",
        "building",
        "resilient",
        "microservices",
    ]


def test_skills_only():
    assert extract_keywords("", ["Go"]) == ["go"]


def test_multiword_skill_kept_as_phrase():
    assert extract_keywords("", ["Machine   Learning"]) == ["machine learning"]


def test_default_keywords_when_everything_is_empty():
    assert extract_keywords("", []) == list(DEFAULT_KEYWORDS)
    assert extract_keywords("a an of to", None) == list(DEFAULT_KEYWORDS)


def test_role_from_labelled_line():
    jd = "Role: Senior Data Engineer\nWe build pipelines."
    assert derive_role(jd) == "Senior Data Engineer"
    assert derive_role("Position - Platform SRE; remote") == "Platform SRE"


def test_role_falls_back_to_top_frequency_term():
    assert derive_role("Python developer needed. Python and Django.") == "python"


def test_role_falls_back_to_literal():
    assert derive_role("") == "the role"


def test_keyword_pool():
    pool = build_keyword_pool("", [])
    assert pool.terms == DEFAULT_KEYWORDS
    assert pool.role == "the role"
    assert len(pool) == 3

    pool = build_keyword_pool(BACKEND_JD, ["kafka", "postgresql"])
    assert pool.terms[:2] == ("kafka", "postgresql")
    assert pool.role == "backend"
