"""Text normalization helpers shared by search and sorting."""

import re
import unicodedata

_WORD_RE = re.compile(r"\w+")


def normalize_text(text: str) -> str:
    """Lower-case text and strip diacritical marks.

    'Café Crème' -> 'cafe creme'
    """
    decomposed = unicodedata.normalize("NFD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def tokenize(text: str) -> list[str]:
    """Split already normalized text into word tokens, dropping punctuation."""
    return _WORD_RE.findall(text)
