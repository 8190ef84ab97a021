"""
AI endpoints: suggestions, board summary, clustering and semantic search.
"""

from fastapi import APIRouter, Depends

from ..agents.assistant import IdeaAssistant
from ..core import config
from ..core import dao
from ..core.cluster_service import cluster_board
from ..core.search_service import semantic_search
from ..vector.embeddings import IEmbeddingProvider
from .dependencies import get_assistant, get_embedding_provider, require_board
from .schemas import (
    SuggestRequest,
    SuggestResponse,
    BoardRequest,
    SummaryResponse,
    ClusterRequest,
    ClusterResponse,
    SearchRequest,
    SearchResult,
    SearchResponse,
    CardResponse
)

router = APIRouter()


@router.post("/suggest", response_model=SuggestResponse)
def suggest_endpoint(request: SuggestRequest, assistant: IdeaAssistant = Depends(get_assistant)):
    """Three ideas related to a card, using the board's other cards as context."""
    require_board(request.board_id)

    context = [
        f"{card.title}: {card.description}" if card.description else card.title
        for card in dao.list_cards(request.board_id, limit=config.SUGGESTION_CONTEXT_LIMIT)
        if card.title != request.card_title
    ]
    suggestions = assistant.suggest_ideas(request.card_title, request.card_description, context)
    return SuggestResponse(suggestions=suggestions)


@router.post("/summarize", response_model=SummaryResponse)
def summarize_endpoint(request: BoardRequest, assistant: IdeaAssistant = Depends(get_assistant)):
    require_board(request.board_id)
    cards = dao.list_cards(request.board_id)
    return SummaryResponse(summary=assistant.summarize_board(cards))


@router.post("/cluster", response_model=ClusterResponse)
async def cluster_endpoint(request: ClusterRequest,
                           embedding_provider: IEmbeddingProvider = Depends(get_embedding_provider)):
    require_board(request.board_id)
    threshold = request.threshold if request.threshold is not None else config.CLUSTER_THRESHOLD
    result = await cluster_board(request.board_id, threshold, _embedding_provider=embedding_provider)
    return ClusterResponse(**result)


@router.post("/search", response_model=SearchResponse)
async def search_endpoint(request: SearchRequest,
                          embedding_provider: IEmbeddingProvider = Depends(get_embedding_provider)):
    require_board(request.board_id)
    results = await semantic_search(
        request.board_id,
        request.query,
        top_k=request.top_k if request.top_k is not None else config.SEARCH_TOP_K,
        min_score=request.min_score if request.min_score is not None else config.SEARCH_MIN_SCORE,
        _embedding_provider=embedding_provider
    )
    return SearchResponse(results=[
        SearchResult(card=CardResponse.from_record(result["card"]), score=result["score"])
        for result in results
    ])
