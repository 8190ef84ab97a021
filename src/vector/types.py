"""
Vector records, search results and cluster payloads.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class VectorRecord:
    """Represents a card vector with metadata."""

    id: str
    """Card identifier"""

    vector: Optional[List[float]]
    """The embedding of the card's title and description"""

    metadata: Dict[str, object] = field(default_factory=dict)
    """Additional metadata associated with the vector"""


@dataclass
class QueryResult:
    """Represents a search result from vector store."""

    id: str
    """Identifier for the matching record"""

    score: float
    """Cosine similarity of the match"""

    metadata: Dict[str, object] = field(default_factory=dict)
    """Metadata associated with the matched record"""


@dataclass
class CardCluster:
    """A labeled group of cards from one clustering run."""

    cluster_id: str
    label: str
    card_ids: List[str]

    @property
    def card_count(self) -> int:
        return len(self.card_ids)

    def to_payload(self) -> Dict[str, object]:
        return {
            "clusterId": self.cluster_id,
            "label": self.label,
            "cardIds": list(self.card_ids),
            "cardCount": self.card_count,
        }
