"""
Typed records returned by the data access layer.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass
class BoardRecord:
    id: str
    name: str
    created_at: datetime
    updated_at: datetime


@dataclass
class ColumnRecord:
    id: str
    board_id: str
    title: str
    position: int
    created_at: datetime


@dataclass
class CardRecord:
    id: str
    board_id: str
    column_id: str
    title: str
    description: str
    position: int
    embedding: Optional[List[float]]
    mood: str
    cluster_id: Optional[str]
    revision: int
    created_at: datetime
    updated_at: datetime

    @property
    def text(self) -> str:
        """Title and description joined, the unit of embedding."""
        return f"{self.title} {self.description}"

    def has_embedding(self, dimension: int = None) -> bool:
        if not self.embedding:
            return False
        return dimension is None or len(self.embedding) == dimension

