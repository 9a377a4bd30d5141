"""Character-count token estimates.

One token is approximated as four characters. This is not a real tokenizer;
it exists so token limits can be applied before a model is involved.
"""
import math

APPROX_CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    return math.ceil(len(text) / APPROX_CHARS_PER_TOKEN)


def truncate_text(text: str, max_tokens: int) -> str:
    max_chars = max_tokens * APPROX_CHARS_PER_TOKEN
    return text[:max_chars] if len(text) > max_chars else text


def validate_token_limits(text: str, min_tokens: int, max_tokens: int) -> bool:
    tokens = estimate_tokens(text)
    return min_tokens <= tokens <= max_tokens
