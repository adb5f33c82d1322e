import pytest

from interview_qgen.services.canonicalizer import (
    NORMALIZATION_RULES,
    canonicalize,
    exact_key,
    normalize,
)

RULES = {rule.name: rule for rule in NORMALIZATION_RULES}


def test_rule_order_is_fixed():
    assert [r.name for r in NORMALIZATION_RULES] == [
        "focus_hint",
        "trailing_instruction",
        "jd_emphasis_lead",
        "repeated_noun",
        "heavy_workloads",
        "heavy_work",
    ]


def test_focus_hint_rule():
    out = RULES["focus_hint"].apply("How do you scale APIs? (Focus: Kafka)")
    assert out.strip() == "How do you scale APIs?"


@pytest.mark.parametrize(
    "text, expected",
    [
        (
            "Describe your testing strategy, focusing on integration tests.",
            "Describe your testing strategy",
        ),
        ("What is your notice period? Please answer briefly.", "What is your notice period?"),
        ("Explain CAP theorem - see the question above", "Explain CAP theorem"),
        ("Walk me through the design, please focus on storage.", "Walk me through the design"),
        ("Describe the rollout focused on reliability", "Describe the rollout"),
    ],
)
def test_trailing_instruction_rule(text, expected):
    assert RULES["trailing_instruction"].apply(text) == expected


def test_trailing_instruction_keeps_leading_please():
    text = "Please describe a project you led."
    assert RULES["trailing_instruction"].apply(text) == text


def test_jd_emphasis_lead_rule():
    out = RULES["jd_emphasis_lead"].apply(
        "Based on the JD emphasis on Kafka, how would you design a pipeline?"
    )
    assert out == "how would you design a pipeline?"


def test_repeated_noun_rule():
    rule = RULES["repeated_noun"]
    assert rule.apply("experience with kafka and working with kafka") == "experience with kafka"
    assert rule.apply("Kafka and working with kafka") == "Kafka"
    assert rule.apply("kafka and working with redis") == "kafka and working with redis"


def test_heavy_workloads_rule():
    out = RULES["heavy_workloads"].apply(
        "Design a solution that scales for heavy Kafka Streams workloads. Why?"
    )
    assert out == "Design a solution that scales for heavy workloads. Why?"


def test_heavy_work_rule():
    out = RULES["heavy_work"].apply("How do you balance speed when delivering kafka-heavy work?")
    assert out == "How do you balance speed when delivering heavy work?"


def test_normalize_collapses_whitespace_punctuation_and_case():
    assert normalize("  Tell me   about a time you LED a team!! ") == (
        "tell me about a time you led a team"
    )


def test_keys():
    keys = canonicalize("Tell me about a time you led a team?")
    assert keys.exact == "tell me about a time you led a team"
    assert keys.opener == "tell me about"
    assert keys.stem == "tell me"


def test_stem_drops_descriptive_tail_then_truncates():
    keys = canonicalize(
        "Explain your approach to testing and observability for features involving kafka."
    )
    assert keys.stem == "explain your approach to testing and"
    other = canonicalize(
        "Explain your approach to testing and observability for features involving redis."
    )
    assert keys.stem == other.stem
    assert keys.exact != other.exact


def test_topic_variants_collapse_to_one_exact_key():
    a = "Design a solution that scales for heavy kafka workloads. What architecture would you use and why?"
    b = "Design a solution that scales for heavy postgresql workloads. What architecture would you use and why?"
    assert exact_key(a) == exact_key(b)


def test_boilerplate_variants_share_exact_key():
    assert exact_key("Explain caching (Focus: Redis).") == exact_key("explain caching")
    assert exact_key(
        "Based on the JD emphasis on Go, explain caching. Please be concise."
    ) == exact_key("Explain caching")


@pytest.mark.parametrize(
    "text",
    [
        "Based on the JD emphasis on Kafka, Design a solution that scales for heavy "
        "Kafka Streams workloads (Focus: Kafka). Please be specific.",
        "Can you summarize your experience relevant to Backend and working with backend?",
        "What is your notice period? Please answer briefly.",
        "Please describe a project you led.",
        "  How do you balance quality vs. speed when delivering ML-heavy work?  ",
        "",
    ],
)
def test_canonicalize_is_a_fixed_point(text):
    keys = canonicalize(text)
    assert canonicalize(keys.exact) == keys
    assert canonicalize(keys) == keys


def test_empty_input():
    keys = canonicalize(None)
    assert keys.exact == keys.opener == keys.stem == ""
