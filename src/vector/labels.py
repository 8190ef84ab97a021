"""
Human-readable cluster names from member card text.
"""

from collections import Counter
from typing import List, Sequence, Tuple

from .tokenizer import STOP_WORDS, normalize_text

LABEL_STOP_WORDS = STOP_WORDS | frozenset({
    'with', 'from', 'have', 'been', 'will', 'your', 'their',
})

LABEL_MIN_WORD_LENGTH = 4
LABEL_WORD_COUNT = 2
FALLBACK_LABEL_LENGTH = 25
DEFAULT_LABEL = "Group"


def extract_keywords(texts: Sequence[str], limit: int = LABEL_WORD_COUNT) -> List[Tuple[str, int]]:
    """Most frequent non-trivial words across texts, ties in first-seen order."""
    words = normalize_text(" ".join(texts)).split()
    counts = Counter(
        word for word in words
        if len(word) >= LABEL_MIN_WORD_LENGTH and word not in LABEL_STOP_WORDS
    )
    return counts.most_common(limit)


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def generate_cluster_label(member_texts: Sequence[str]) -> str:
    """
    Name a cluster after its two most frequent words.

    Falls back to the first member's text (truncated) and then to "Group"
    when no qualifying words remain.
    """
    keywords = extract_keywords(member_texts, LABEL_WORD_COUNT)
    if keywords:
        label = " & ".join(word for word, _ in keywords)
    else:
        first_text = member_texts[0].strip() if member_texts else ""
        label = first_text[:FALLBACK_LABEL_LENGTH] or DEFAULT_LABEL

    return capitalize_first(label)
