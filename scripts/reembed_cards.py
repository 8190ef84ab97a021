#!/usr/bin/env python3
"""
Recompute stored card embeddings.

Run after switching EMBED_PROVIDER or EMBED_DIMENSION so every stored vector
comes from the active provider.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core import dao
from src.core.config import EMBED_PROVIDER, get_embedding_provider
from src.core.embedding_sync import ensure_board_embeddings, reembed_board


async def _run(board_ids, missing_only: bool, provider) -> int:
    total = 0
    for board_id in board_ids:
        if missing_only:
            before = [card for card in dao.list_cards(board_id) if not card.has_embedding(provider.get_dimension())]
            await ensure_board_embeddings(board_id, provider)
            count = len(before)
        else:
            count = await reembed_board(board_id, provider)
        print(f"Board {board_id}: {count} card(s) embedded")
        total += count
    return total


def main():
    parser = argparse.ArgumentParser(
        description="Recompute card embeddings with the configured provider",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Re-embed every card on every board
  %(prog)s --board-id <id>          # Re-embed one board
  %(prog)s --missing-only           # Only embed cards without a usable vector

Environment variables:
- DB_PATH=./data/ideaboard.db
- EMBED_PROVIDER=hash|sentence_transformers
        """
    )

    parser.add_argument(
        "--board-id", "-b",
        help="Board to re-embed (default: all boards)"
    )

    parser.add_argument(
        "--missing-only", "-m",
        action="store_true",
        help="Skip cards that already have a vector of the right dimension"
    )

    args = parser.parse_args()

    if args.board_id:
        if not dao.get_board(args.board_id):
            print(f"ERROR: Board not found: {args.board_id}")
            return 1
        board_ids = [args.board_id]
    else:
        board_ids = [board.id for board in dao.list_boards()]

    if not board_ids:
        print("No boards found")
        return 0

    provider = get_embedding_provider()
    print(f"Embedding provider: {EMBED_PROVIDER} ({provider.get_dimension()} dimensions)")

    total = asyncio.run(_run(board_ids, args.missing_only, provider))
    print(f"Done: {total} card(s) embedded across {len(board_ids)} board(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
