from __future__ import annotations
import re
from typing import List

# acronym runs, capitalised words, lowercase runs, digits
_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")

def split_words(value: str) -> List[str]:
    return _WORD_RE.findall(value)

def constant_case(value: str) -> str:
    """``"WEBHOOK_Stop_Running_MESSAGE"`` -> ``"WEBHOOK_STOP_RUNNING_MESSAGE"``"""
    return "_".join(w.upper() for w in split_words(value))

def title_case(value: str) -> str:
    """``"stop successful"`` -> ``"Stop Successful"``"""
    return " ".join(w[:1].upper() + w[1:].lower() for w in split_words(value))
