"""Token estimation utilities"""

import math

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Rough token estimate: 1 token ≈ 4 characters, rounded up"""
    return math.ceil(len(text) / CHARS_PER_TOKEN)
