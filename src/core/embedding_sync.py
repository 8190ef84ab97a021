"""
Keeps stored card embeddings in step with card text.
A card's text and vector are always written together or not at all.
"""

import asyncio
from typing import List, Optional

from util.logging import logger

from . import dao
from .schema import CardRecord
from ..vector.embeddings import IEmbeddingProvider


def card_text(title: str, description: str = "") -> str:
    """The text unit embedded for a card."""
    return f"{title} {description or ''}"


def embed_card_text(provider: IEmbeddingProvider, title: str, description: str = "") -> List[float]:
    return provider.embed_text(card_text(title, description))


def _embed_and_persist(card: CardRecord, provider: IEmbeddingProvider) -> bool:
    """Embed one card snapshot and store it if the text has not changed since."""
    embedding = embed_card_text(provider, card.title, card.description)
    stored = dao.set_card_embedding(card.id, embedding, expected_revision=card.revision)

    if stored:
        logger.log_embedding_operation("stored", card.id, {
            "provider": provider.__class__.__name__,
            "dimension": len(embedding),
            "revision": card.revision
        })
    else:
        # Card was edited meanwhile; its update already wrote a fresh vector
        logger.log_embedding_operation("skipped", card.id, {"revision": card.revision}, status="stale")
    return stored


async def _persist_all(cards: List[CardRecord], provider: IEmbeddingProvider) -> int:
    results = await asyncio.gather(*[
        asyncio.to_thread(_embed_and_persist, card, provider)
        for card in cards
    ])
    return sum(1 for stored in results if stored)


async def ensure_board_embeddings(board_id: str, provider: IEmbeddingProvider,
                                  limit: Optional[int] = None) -> List[CardRecord]:
    """
    Embed every card on a board that lacks a usable vector.

    Cards without a vector, or with a vector of another dimension than the
    provider produces, are embedded concurrently. Returns the board's cards
    re-read after the writes.
    """
    cards = dao.list_cards(board_id, limit=limit)
    dimension = provider.get_dimension()
    missing = [card for card in cards if not card.has_embedding(dimension)]

    if not missing:
        return cards

    stored = await _persist_all(missing, provider)
    logger.log_operation("embedding.backfill", "success", {
        "board_id": board_id,
        "missing": len(missing),
        "stored": stored
    })
    return dao.list_cards(board_id, limit=limit)


async def reembed_board(board_id: str, provider: IEmbeddingProvider) -> int:
    """Recompute the embedding of every card on a board. Returns the number stored."""
    cards = dao.list_cards(board_id)
    if not cards:
        return 0
    return await _persist_all(cards, provider)
