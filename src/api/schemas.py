"""
Request and response models for the idea board API.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _not_blank(v: str, field_name: str) -> str:
    if not v or not v.strip():
        raise ValueError(f'{field_name} cannot be empty')
    return v.strip()


class BoardCreateRequest(BaseModel):
    name: str = "My Board"

    @field_validator('name')
    @classmethod
    def name_must_not_be_empty(cls, v):
        return _not_blank(v, 'name')


class BoardUpdateRequest(BaseModel):
    name: str

    @field_validator('name')
    @classmethod
    def name_must_not_be_empty(cls, v):
        return _not_blank(v, 'name')


class ColumnCreateRequest(BaseModel):
    title: str

    @field_validator('title')
    @classmethod
    def title_must_not_be_empty(cls, v):
        return _not_blank(v, 'title')


class CardCreateRequest(BaseModel):
    column_id: str
    title: str
    description: str = ""

    @field_validator('title')
    @classmethod
    def title_must_not_be_empty(cls, v):
        return _not_blank(v, 'title')


class CardUpdateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None

    @field_validator('title')
    @classmethod
    def title_must_not_be_blank(cls, v):
        if v is None:
            return v
        return _not_blank(v, 'title')


class CardMoveRequest(BaseModel):
    column_id: str
    position: int = Field(ge=0)


class CardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    board_id: str
    column_id: str
    title: str
    description: str
    position: int
    mood: str
    cluster_id: Optional[str] = None
    has_embedding: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, card) -> "CardResponse":
        return cls(
            id=card.id,
            board_id=card.board_id,
            column_id=card.column_id,
            title=card.title,
            description=card.description,
            position=card.position,
            mood=card.mood,
            cluster_id=card.cluster_id,
            has_embedding=card.has_embedding(),
            created_at=card.created_at,
            updated_at=card.updated_at
        )


class ColumnResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    board_id: str
    title: str
    position: int


class BoardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime
    updated_at: datetime


class BoardDetailResponse(BoardResponse):
    columns: List[ColumnResponse] = []
    cards: List[CardResponse] = []


class HealthResponse(BaseModel):
    status: str
    version: str
    db_health: bool
    card_count: int
    embed_provider: str
    text_provider: str


# AI endpoints

class SuggestRequest(BaseModel):
    board_id: str
    card_title: str
    card_description: str = ""

    @field_validator('card_title')
    @classmethod
    def title_must_not_be_empty(cls, v):
        return _not_blank(v, 'card_title')


class SuggestResponse(BaseModel):
    suggestions: List[str]


class BoardRequest(BaseModel):
    board_id: str


class SummaryResponse(BaseModel):
    summary: str


class ClusterRequest(BaseModel):
    board_id: str
    threshold: Optional[float] = Field(default=None, gt=0, le=1)


class ClusterCard(BaseModel):
    id: str
    title: str
    description: str


class ClusterPayload(BaseModel):
    clusterId: str
    label: str
    cardIds: List[str]
    cardCount: int
    cards: List[ClusterCard] = []


class ClusterStats(BaseModel):
    totalCards: int
    clustersCreated: int
    averageClusterSize: Optional[float] = None
    threshold: Optional[float] = None


class ClusterResponse(BaseModel):
    clusters: List[ClusterPayload]
    stats: ClusterStats
    message: Optional[str] = None


class SearchRequest(BaseModel):
    board_id: str
    query: str
    top_k: Optional[int] = Field(default=None, ge=1, le=100)
    min_score: Optional[float] = Field(default=None, ge=-1, le=1)


class SearchResult(BaseModel):
    card: CardResponse
    score: float


class SearchResponse(BaseModel):
    results: List[SearchResult]
