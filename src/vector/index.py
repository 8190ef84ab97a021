"""
In-memory vector index over card embeddings.
Brute-force cosine scoring, O(n) per search.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from .similarity import cosine_similarity
from .types import VectorRecord, QueryResult


class IVectorStore(ABC):
    """Abstract interface for vector storage operations."""

    @abstractmethod
    def add(self, record: VectorRecord) -> None:
        """Add a single vector record to the store."""
        pass

    @abstractmethod
    def batch_add(self, records: List[VectorRecord]) -> None:
        """Add multiple vector records to the store."""
        pass

    @abstractmethod
    def search(self, query_vector: Sequence[float], top_k: int = 5, min_score: Optional[float] = None) -> List[QueryResult]:
        """Search for similar vectors and return ranked results."""
        pass

    @abstractmethod
    def delete(self, record_id: str) -> None:
        """Delete a vector record by ID."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all records from the store."""
        pass


class SimpleInMemoryVectorStore(IVectorStore):
    """Simple in-memory implementation of IVectorStore using cosine similarity."""

    def __init__(self):
        self._vectors: Dict[str, VectorRecord] = {}  # record_id -> VectorRecord

    def __len__(self) -> int:
        return len(self._vectors)

    def add(self, record: VectorRecord) -> None:
        """Add or replace a vector record. Records without a vector are ignored."""
        if record.vector is None:
            return
        self._vectors[record.id] = record

    def batch_add(self, records: List[VectorRecord]) -> None:
        """Add multiple vector records to the store."""
        for record in records:
            self.add(record)

    def search(self, query_vector: Sequence[float], top_k: int = 5, min_score: Optional[float] = None) -> List[QueryResult]:
        """
        Score every stored vector against the query.

        Results scoring at or below ``min_score`` are dropped; the rest are
        ranked by descending score with insertion order breaking ties.
        """
        if not self._vectors or top_k <= 0:
            return []

        scored = []
        for record in self._vectors.values():
            score = cosine_similarity(query_vector, record.vector)
            if min_score is not None and score <= min_score:
                continue
            scored.append((record, score))

        scored.sort(key=lambda pair: -pair[1])

        return [
            QueryResult(id=record.id, score=score, metadata=record.metadata)
            for record, score in scored[:top_k]
        ]

    def delete(self, record_id: str) -> None:
        """Delete a vector record by ID."""
        self._vectors.pop(record_id, None)

    def clear(self) -> None:
        """Clear all records from the store."""
        self._vectors.clear()
