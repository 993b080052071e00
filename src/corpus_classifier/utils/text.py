"""Text helpers used before classification."""

from __future__ import annotations
import re
from typing import List

# letters and digits, any script; everything else separates tokens
_TOKEN_RE = re.compile(r"[^\W_]+", re.UNICODE)

def tokenize(text: str, lowercase: bool = False) -> List[str]:
    """Quick tokenization: split on runs of non letter/digit characters.

    Args:
        text: Input text
        lowercase: Lowercase every token

    Returns:
        Tokens in document order
    """
    if not text:
        return []
    tokens = _TOKEN_RE.findall(text)
    if lowercase:
        return [t.lower() for t in tokens]
    return tokens
