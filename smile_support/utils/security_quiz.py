"""
Anti-spam quiz: "What is the highest mountain in Japan?"

Answers are compared after normalization (trim, lowercase, drop whitespace and dots)
against a fixed set of accepted spellings.
"""

import re

SECURITY_QUESTION = "日本で一番高い山は？"

SECURITY_ANSWER_VARIANTS = (
    "富士山",
    "ふじさん",
    "フジサン",
    "fujisan",
    "mt.fuji",
    "mtfuji",
    "mount fuji",
)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_answer(answer: str) -> str:
    s = answer.strip().lower()
    s = _WHITESPACE_RE.sub("", s)
    return s.replace(".", "")


_ACCEPTED = frozenset(normalize_answer(v) for v in SECURITY_ANSWER_VARIANTS)


def validate_security_answer(answer) -> bool:
    """Return True if the answer matches one of the accepted spellings."""
    if not isinstance(answer, str):
        return False
    normalized = normalize_answer(answer)
    return bool(normalized) and normalized in _ACCEPTED
