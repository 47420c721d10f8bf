"""Deliberately simple tokenization: lowercase words, apostrophes kept."""

import re
from typing import Iterable, List

# Anything that is not a letter, digit, underscore or apostrophe separates words
_SEPARATOR = re.compile(r"[^\w']+")


def tokenize(text: str) -> List[str]:
    """
    Split raw text into lowercase word tokens.

    >>> tokenize("C'est BIEN, mon_petit!")
    ["c'est", 'bien', 'mon_petit']
    """
    return [token for token in _SEPARATOR.split(text.lower()) if token.strip()]


def detokenize(words: Iterable[str]) -> str:
    return " ".join(words)
