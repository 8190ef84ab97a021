"""
Text normalization for card embeddings.
Lowercases, strips punctuation, removes stop words and applies light stemming.
"""

import re
from typing import List

STOP_WORDS = frozenset({
    # function words
    'the', 'and', 'for', 'with', 'this', 'that', 'from', 'have', 'been',
    'will', 'would', 'could', 'should',
    # board filler words
    'system', 'platform', 'powered', 'using', 'based', 'ideas',
})

# (suffix, minimum exclusive word length) checked longest suffix first
STEM_RULES = (
    ('ation', 8),
    ('tion', 6),
    ('ment', 5),
    ('ing', 7),
    ('ed', 5),
    ('s', 5),
)

MIN_TOKEN_LENGTH = 3

_PUNCTUATION = re.compile(r'[^\w\s]|_')
_WHITESPACE = re.compile(r'\s+')


def normalize_text(text: str) -> str:
    """Lowercase, replace punctuation with spaces and collapse whitespace."""
    if not text:
        return ""
    cleaned = _PUNCTUATION.sub(' ', text.lower())
    return _WHITESPACE.sub(' ', cleaned).strip()


def stem(word: str) -> str:
    """Strip at most one common suffix from a word."""
    # deforestation, reforestation, forests
    if 'forest' in word:
        return 'forest'

    for suffix, min_length in STEM_RULES:
        if len(word) > min_length and word.endswith(suffix):
            return word[:-len(suffix)]
    return word


def tokenize(text: str) -> List[str]:
    """
    Turn raw card text into the filtered token sequence used for embedding.

    Args:
        text: Arbitrary text, usually card title + " " + description

    Returns:
        Stemmed tokens in their original order (may be empty)
    """
    normalized = normalize_text(text)
    if not normalized:
        return []

    return [
        stem(word)
        for word in normalized.split(' ')
        if len(word) >= MIN_TOKEN_LENGTH and word not in STOP_WORDS
    ]
