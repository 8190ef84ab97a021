"""
Semantic search over a board's cards.
Embeds the query and ranks stored card vectors by cosine similarity.
"""

from typing import Any, Dict, List

from util.logging import logger

from .config import SEARCH_MIN_SCORE, SEARCH_TOP_K, get_embedding_provider
from .embedding_sync import ensure_board_embeddings
from ..vector.index import SimpleInMemoryVectorStore
from ..vector.types import VectorRecord


async def semantic_search(board_id: str, query: str, top_k: int = SEARCH_TOP_K,
                          min_score: float = SEARCH_MIN_SCORE,
                          _embedding_provider=None) -> List[Dict[str, Any]]:
    """
    Find the cards on a board most similar to a free-text query.

    Args:
        board_id: Board to search
        query: Free-text query
        top_k: Maximum number of results to return
        min_score: Results must score strictly above this
        _embedding_provider: Optional embedding provider for testing

    Returns:
        List of dicts with 'card' (CardRecord) and 'score', best match first
    """
    if not query or not query.strip():
        return []

    embedding_provider = _embedding_provider if _embedding_provider is not None else get_embedding_provider()

    cards = await ensure_board_embeddings(board_id, embedding_provider)
    if not cards:
        return []

    store = SimpleInMemoryVectorStore()
    store.batch_add([VectorRecord(id=card.id, vector=card.embedding) for card in cards])

    query_embedding = embedding_provider.embed_text(query)
    hits = store.search(query_embedding, top_k=top_k, min_score=min_score)

    cards_by_id = {card.id: card for card in cards}
    results = [
        {"card": cards_by_id[hit.id], "score": float(hit.score)}
        for hit in hits
    ]

    logger.log_search(board_id, query, len(results), min_score)
    return results
