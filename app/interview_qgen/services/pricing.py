"""
Purpose: Token math & cost estimation for generation requests.
Central pricing logic so UI/controller do not duplicate calculations.
"""

from typing import Optional

from ..models import Price

PRICE_TABLE = {
    "gpt-4o": Price(2.50, 10.00),
    "gpt-4o-mini": Price(0.15, 0.60),
    "gpt-4.1-mini": Price(0.40, 1.60),
    "gpt-5-mini": Price(0.25, 2.00),
}
FREE = Price(0.0, 0.0)

PROMPT_TOKENS_PER_QUESTION = 100
COMPLETION_TOKENS_PER_QUESTION = 50


def price_for(model: Optional[str]) -> Price:
    """Exact entry, else the longest table key the (dated) model name starts with."""
    if not model:
        return FREE
    if model in PRICE_TABLE:
        return PRICE_TABLE[model]
    prefixes = [k for k in PRICE_TABLE if model.startswith(k + "-")]
    return PRICE_TABLE[max(prefixes, key=len)] if prefixes else FREE


def estimate_cost(model: Optional[str], tokens_in: int, tokens_out: int) -> float:
    p = price_for(model)
    return (tokens_in * p.input_per_1M + tokens_out * p.output_per_1M) / 1_000_000


def estimate_generation_usage(
    job_description: str, requested: int, returned: int
) -> tuple[int, int]:
    """(prompt_tokens, completion_tokens) when the model reported no usage."""
    prompt = round(len(job_description or "") / 4) + requested * PROMPT_TOKENS_PER_QUESTION
    completion = returned * COMPLETION_TOKENS_PER_QUESTION
    return prompt, completion
