"""
Card text embeddings.
FeatureHashEmbedding is the deterministic default; any provider returning a
fixed-dimension vector per text can replace it without touching scoring or clustering.
"""

from abc import ABC, abstractmethod
from collections import Counter
import math
from typing import List

import numpy as np

from .tokenizer import tokenize

EMBEDDING_DIMENSION = 384

HASH_VARIANTS = 5
HASH_SEED_MULTIPLIER = 2654435761
SPREAD_OFFSETS = 2
SPREAD_STEP = 1000

BIGRAM_SEED = 42
BIGRAM_WEIGHT = 0.8
TRIGRAM_SEED = 123
TRIGRAM_WEIGHT = 0.6


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    def embed_text(self, text: str) -> List[float]:
        """Generate embedding vector for given text."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def rolling_hash(text: str, seed: int) -> int:
    """Shift-add-xor rolling hash with 32-bit signed wraparound."""
    value = seed
    for char in text:
        shifted = _to_int32(_to_int32(value) << 5)
        value = _to_int32(shifted + value) ^ ord(char)
    return value


class FeatureHashEmbedding(IEmbeddingProvider):
    """Deterministic multi-hash feature hashing over unigrams, bigrams and trigrams.

    Each distinct token contributes ``tf * log(len + 1)`` to up to ten slots
    (five hash variants times two spread offsets). Adjacent token pairs and
    triples add constant weights at one slot each. The result is L2-normalized,
    or all zeros when the text has no usable tokens.
    """

    def __init__(self, dimension: int = EMBEDDING_DIMENSION):
        self.dimension = dimension

    def embed_text(self, text: str) -> List[float]:
        """Generate deterministic embedding vector for card text."""
        return self.embed_tokens(tokenize(text))

    def embed_tokens(self, tokens: List[str]) -> List[float]:
        vector = np.zeros(self.dimension, dtype=np.float64)
        if not tokens:
            return vector.tolist()

        token_count = len(tokens)
        for word, count in Counter(tokens).items():
            weight = (count / token_count) * math.log(len(word) + 1)
            for variant in range(HASH_VARIANTS):
                hashed = rolling_hash(word, variant * HASH_SEED_MULTIPLIER)
                for offset in range(SPREAD_OFFSETS):
                    position = abs(hashed + offset * SPREAD_STEP) % self.dimension
                    vector[position] += weight

        for i in range(token_count - 1):
            bigram = f"{tokens[i]}_{tokens[i + 1]}"
            vector[abs(rolling_hash(bigram, BIGRAM_SEED)) % self.dimension] += BIGRAM_WEIGHT

        for i in range(token_count - 2):
            trigram = f"{tokens[i]}_{tokens[i + 1]}_{tokens[i + 2]}"
            vector[abs(rolling_hash(trigram, TRIGRAM_SEED)) % self.dimension] += TRIGRAM_WEIGHT

        norm = np.linalg.norm(vector)
        if norm > 0:
            vector = vector / norm
        return vector.tolist()

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        return self.dimension


class SentenceTransformerEmbedding(IEmbeddingProvider):
    """Sentence transformers embedding provider using pre-trained models.

    Uses all-MiniLM-L6-v2 by default, which also produces 384-dimension vectors.
    The model is loaded on first use.
    """

    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        self.model_name = model_name
        self._model = None
        self._dimension = None

    @property
    def model(self):
        if self._model is None:
            from sentence_transformers import SentenceTransformer
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def embed_text(self, text: str) -> List[float]:
        """Generate embedding vector using sentence transformers."""
        if not text or not text.strip():
            return [0.0] * self.get_dimension()
        embedding = self.model.encode(text, convert_to_numpy=True, normalize_embeddings=True)
        return embedding.astype(np.float64).tolist()

    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        if self._dimension is None:
            self._dimension = self.model.get_sentence_embedding_dimension()
        return self._dimension


_default_provider = FeatureHashEmbedding()


def embed(text: str) -> List[float]:
    """Embed text with the default deterministic provider."""
    return _default_provider.embed_text(text)
