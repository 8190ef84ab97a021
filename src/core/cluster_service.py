"""
Board clustering: embeds cards, groups them, labels the groups and stores assignments.
"""

from typing import Any, Dict, List

from util.logging import logger

from . import dao
from .config import CLUSTER_THRESHOLD, get_embedding_provider
from .embedding_sync import ensure_board_embeddings
from .schema import CardRecord
from ..vector.clustering import cluster_cards
from ..vector.labels import generate_cluster_label
from ..vector.similarity import cosine_similarity
from ..vector.types import CardCluster


def _log_similarity_matrix(cards: List[CardRecord]) -> None:
    if not logger.debug_enabled():
        return
    for i, first in enumerate(cards):
        for second in cards[i + 1:]:
            score = cosine_similarity(first.embedding, second.embedding)
            logger.debug(f'"{first.title}" <-> "{second.title}": {score:.4f}')


def build_clusters(cards: List[CardRecord], threshold: float) -> List[CardCluster]:
    """Cluster cards by embedding and label each group from its members' text."""
    items = [(card.id, card.embedding or []) for card in cards]
    assignments = cluster_cards(items, threshold)

    cards_by_id = {card.id: card for card in cards}
    clusters = []
    for cluster_id, card_ids in assignments.items():
        member_texts = [cards_by_id[card_id].text for card_id in card_ids]
        clusters.append(CardCluster(
            cluster_id=cluster_id,
            label=generate_cluster_label(member_texts),
            card_ids=card_ids
        ))
    return clusters


async def cluster_board(board_id: str, threshold: float = CLUSTER_THRESHOLD,
                        _embedding_provider=None) -> Dict[str, Any]:
    """
    Recompute the clusters of a board and replace its previous assignments.

    Returns:
        Dict with 'clusters' (payload dicts including member cards) and 'stats'
    """
    embedding_provider = _embedding_provider if _embedding_provider is not None else get_embedding_provider()

    cards = await ensure_board_embeddings(board_id, embedding_provider)
    if not cards:
        return {
            "clusters": [],
            "message": "No cards to cluster",
            "stats": {"totalCards": 0, "clustersCreated": 0}
        }

    _log_similarity_matrix(cards)

    clusters = build_clusters(cards, threshold)
    dao.assign_clusters(board_id, {
        card_id: cluster.cluster_id
        for cluster in clusters
        for card_id in cluster.card_ids
    })

    cards_by_id = {card.id: card for card in cards}
    payload = []
    for cluster in clusters:
        entry = cluster.to_payload()
        entry["cards"] = [
            {
                "id": card_id,
                "title": cards_by_id[card_id].title,
                "description": cards_by_id[card_id].description
            }
            for card_id in cluster.card_ids
        ]
        payload.append(entry)

    logger.log_cluster_run(board_id, threshold, len(cards), len(clusters))

    return {
        "clusters": payload,
        "stats": {
            "totalCards": len(cards),
            "clustersCreated": len(clusters),
            "averageClusterSize": len(cards) / len(clusters),
            "threshold": threshold
        }
    }
