"""
Data access for boards, columns and cards.
Reads return typed records; failures are logged and surface as None/False/[].
"""

import json
import sqlite3
import uuid
from datetime import datetime
from typing import Dict, List, Optional

from util.logging import logger

from .db import get_db, init_db
from .schema import BoardRecord, ColumnRecord, CardRecord

# Initialize database on module import
init_db()

CARD_COLUMNS = (
    "id, board_id, column_id, title, description, position, embedding, "
    "mood, cluster_id, revision, created_at, updated_at"
)


def _now() -> str:
    return datetime.now().isoformat()


def _parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value)


def _encode_embedding(embedding: Optional[List[float]]) -> Optional[str]:
    if embedding is None:
        return None
    return json.dumps([float(x) for x in embedding])


def _decode_embedding(raw: Optional[str]) -> Optional[List[float]]:
    if not raw:
        return None
    try:
        return [float(x) for x in json.loads(raw)]
    except (json.JSONDecodeError, TypeError, ValueError):
        logger.warning("Discarding unreadable stored embedding")
        return None


def _row_to_card(row) -> CardRecord:
    (card_id, board_id, column_id, title, description, position, embedding,
     mood, cluster_id, revision, created_at, updated_at) = row
    return CardRecord(
        id=card_id,
        board_id=board_id,
        column_id=column_id,
        title=title,
        description=description or "",
        position=position,
        embedding=_decode_embedding(embedding),
        mood=mood,
        cluster_id=cluster_id,
        revision=revision,
        created_at=_parse_ts(created_at),
        updated_at=_parse_ts(updated_at)
    )


# Boards

DEFAULT_COLUMNS = ("Ideas", "In Progress", "Completed")


def create_board(name: str) -> Optional[BoardRecord]:
    """Create a board with the default workflow columns and return it."""
    board_id = uuid.uuid4().hex
    now = _now()
    try:
        with get_db() as conn:
            conn.execute(
                "INSERT INTO boards (id, name, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (board_id, name.strip(), now, now)
            )
            conn.executemany(
                "INSERT INTO columns (id, board_id, title, position, created_at) VALUES (?, ?, ?, ?, ?)",
                [(uuid.uuid4().hex, board_id, title, position, now)
                 for position, title in enumerate(DEFAULT_COLUMNS)]
            )
            conn.commit()
    except sqlite3.Error as e:
        logger.error(f"Failed to create board '{name}': {e}")
        return None

    logger.log_operation("board.create", "success", {"board_id": board_id, "columns": len(DEFAULT_COLUMNS)})
    return get_board(board_id)


def update_board(board_id: str, name: str) -> Optional[BoardRecord]:
    """Rename a board."""
    try:
        with get_db() as conn:
            cursor = conn.execute(
                "UPDATE boards SET name = ?, updated_at = ? WHERE id = ?",
                (name.strip(), _now(), board_id)
            )
            conn.commit()
            if cursor.rowcount == 0:
                return None
    except sqlite3.Error as e:
        logger.error(f"Failed to update board '{board_id}': {e}")
        return None

    logger.log_operation("board.update", "success", {"board_id": board_id})
    return get_board(board_id)


def get_board(board_id: str) -> Optional[BoardRecord]:
    """Get a board by id."""
    if not board_id or not board_id.strip():
        return None
    try:
        with get_db() as conn:
            row = conn.execute(
                "SELECT id, name, created_at, updated_at FROM boards WHERE id = ?",
                (board_id.strip(),)
            ).fetchone()
    except sqlite3.Error as e:
        logger.error(f"Failed to get board '{board_id}': {e}")
        return None

    if not row:
        return None
    return BoardRecord(id=row[0], name=row[1], created_at=_parse_ts(row[2]), updated_at=_parse_ts(row[3]))


def list_boards() -> List[BoardRecord]:
    """List all boards, newest first."""
    try:
        with get_db() as conn:
            rows = conn.execute(
                "SELECT id, name, created_at, updated_at FROM boards ORDER BY created_at DESC"
            ).fetchall()
    except sqlite3.Error as e:
        logger.error(f"Failed to list boards: {e}")
        return []

    return [
        BoardRecord(id=r[0], name=r[1], created_at=_parse_ts(r[2]), updated_at=_parse_ts(r[3]))
        for r in rows
    ]


def delete_board(board_id: str) -> bool:
    """Delete a board together with its columns and cards."""
    try:
        with get_db() as conn:
            cursor = conn.execute("DELETE FROM boards WHERE id = ?", (board_id,))
            conn.commit()
            deleted = cursor.rowcount > 0
    except sqlite3.Error as e:
        logger.error(f"Failed to delete board '{board_id}': {e}")
        return False

    if deleted:
        logger.log_operation("board.delete", "success", {"board_id": board_id})
    return deleted


# Columns

def create_column(board_id: str, title: str) -> Optional[ColumnRecord]:
    """Append a column to the end of a board."""
    column_id = uuid.uuid4().hex
    now = _now()
    try:
        with get_db() as conn:
            (position,) = conn.execute(
                "SELECT COUNT(*) FROM columns WHERE board_id = ?", (board_id,)
            ).fetchone()
            conn.execute(
                "INSERT INTO columns (id, board_id, title, position, created_at) VALUES (?, ?, ?, ?, ?)",
                (column_id, board_id, title.strip(), position, now)
            )
            conn.commit()
    except sqlite3.Error as e:
        logger.error(f"Failed to create column on board '{board_id}': {e}")
        return None

    return get_column(column_id)


def get_column(column_id: str) -> Optional[ColumnRecord]:
    try:
        with get_db() as conn:
            row = conn.execute(
                "SELECT id, board_id, title, position, created_at FROM columns WHERE id = ?",
                (column_id,)
            ).fetchone()
    except sqlite3.Error as e:
        logger.error(f"Failed to get column '{column_id}': {e}")
        return None

    if not row:
        return None
    return ColumnRecord(id=row[0], board_id=row[1], title=row[2], position=row[3], created_at=_parse_ts(row[4]))


def list_columns(board_id: str) -> List[ColumnRecord]:
    try:
        with get_db() as conn:
            rows = conn.execute(
                "SELECT id, board_id, title, position, created_at FROM columns WHERE board_id = ? ORDER BY position",
                (board_id,)
            ).fetchall()
    except sqlite3.Error as e:
        logger.error(f"Failed to list columns for board '{board_id}': {e}")
        return []

    return [
        ColumnRecord(id=r[0], board_id=r[1], title=r[2], position=r[3], created_at=_parse_ts(r[4]))
        for r in rows
    ]


# Cards

def create_card(board_id: str, column_id: str, title: str, description: str = "",
                embedding: Optional[List[float]] = None, mood: str = "neutral") -> Optional[CardRecord]:
    """Append a card to a column, storing its text and embedding together."""
    card_id = uuid.uuid4().hex
    now = _now()
    try:
        with get_db() as conn:
            (position,) = conn.execute(
                "SELECT COUNT(*) FROM cards WHERE column_id = ?", (column_id,)
            ).fetchone()
            conn.execute(
                f"INSERT INTO cards ({CARD_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (card_id, board_id, column_id, title.strip(), description or "", position,
                 _encode_embedding(embedding), mood, None, 0, now, now)
            )
            conn.commit()
    except sqlite3.Error as e:
        logger.error(f"Failed to create card on board '{board_id}': {e}")
        return None

    logger.log_card_operation("create", card_id, {"board_id": board_id, "column_id": column_id})
    return get_card(card_id)


def get_card(card_id: str) -> Optional[CardRecord]:
    """Get a card by id."""
    try:
        with get_db() as conn:
            row = conn.execute(
                f"SELECT {CARD_COLUMNS} FROM cards WHERE id = ?", (card_id,)
            ).fetchone()
    except sqlite3.Error as e:
        logger.error(f"Failed to get card '{card_id}': {e}")
        return None

    return _row_to_card(row) if row else None


def list_cards(board_id: str, limit: Optional[int] = None) -> List[CardRecord]:
    """List a board's cards in creation order."""
    query = f"SELECT {CARD_COLUMNS} FROM cards WHERE board_id = ? ORDER BY created_at, rowid"
    params: tuple = (board_id,)
    if limit is not None:
        query += " LIMIT ?"
        params = (board_id, limit)

    try:
        with get_db() as conn:
            rows = conn.execute(query, params).fetchall()
    except sqlite3.Error as e:
        logger.error(f"Failed to list cards for board '{board_id}': {e}")
        return []

    return [_row_to_card(row) for row in rows]


def update_card_content(card_id: str, title: str, description: str,
                        embedding: List[float], mood: str) -> Optional[CardRecord]:
    """Replace a card's text, embedding and mood in one write."""
    try:
        with get_db() as conn:
            cursor = conn.execute(
                "UPDATE cards SET title = ?, description = ?, embedding = ?, mood = ?, "
                "revision = revision + 1, updated_at = ? WHERE id = ?",
                (title.strip(), description or "", _encode_embedding(embedding), mood, _now(), card_id)
            )
            conn.commit()
            if cursor.rowcount == 0:
                return None
    except sqlite3.Error as e:
        logger.error(f"Failed to update card '{card_id}': {e}")
        return None

    logger.log_card_operation("update", card_id, {"dimension": len(embedding)})
    return get_card(card_id)


def set_card_embedding(card_id: str, embedding: List[float], expected_revision: int) -> bool:
    """
    Store an embedding computed from the card text at ``expected_revision``.

    The write is skipped when the card has been edited since, so a vector is
    never stored next to text it was not computed from.
    """
    try:
        with get_db() as conn:
            cursor = conn.execute(
                "UPDATE cards SET embedding = ? WHERE id = ? AND revision = ?",
                (_encode_embedding(embedding), card_id, expected_revision)
            )
            conn.commit()
            return cursor.rowcount > 0
    except sqlite3.Error as e:
        logger.error(f"Failed to store embedding for card '{card_id}': {e}")
        return False


def move_card(card_id: str, column_id: str, position: int) -> Optional[CardRecord]:
    """Move a card to a column position, shifting its neighbours."""
    card = get_card(card_id)
    target = get_column(column_id)
    if not card or not target or target.board_id != card.board_id:
        return None

    try:
        with get_db() as conn:
            (target_count,) = conn.execute(
                "SELECT COUNT(*) FROM cards WHERE column_id = ? AND id != ?", (column_id, card_id)
            ).fetchone()
            position = max(0, min(position, target_count))

            if card.column_id == column_id:
                if position < card.position:
                    conn.execute(
                        "UPDATE cards SET position = position + 1 "
                        "WHERE column_id = ? AND position >= ? AND position < ?",
                        (column_id, position, card.position)
                    )
                elif position > card.position:
                    conn.execute(
                        "UPDATE cards SET position = position - 1 "
                        "WHERE column_id = ? AND position > ? AND position <= ?",
                        (column_id, card.position, position)
                    )
            else:
                conn.execute(
                    "UPDATE cards SET position = position - 1 WHERE column_id = ? AND position > ?",
                    (card.column_id, card.position)
                )
                conn.execute(
                    "UPDATE cards SET position = position + 1 WHERE column_id = ? AND position >= ?",
                    (column_id, position)
                )

            conn.execute(
                "UPDATE cards SET column_id = ?, position = ?, updated_at = ? WHERE id = ?",
                (column_id, position, _now(), card_id)
            )
            conn.commit()
    except sqlite3.Error as e:
        logger.error(f"Failed to move card '{card_id}': {e}")
        return None

    logger.log_card_operation("move", card_id, {"column_id": column_id, "position": position})
    return get_card(card_id)


def delete_card(card_id: str) -> bool:
    """Delete a card and close the gap it leaves in its column."""
    card = get_card(card_id)
    if not card:
        return False

    try:
        with get_db() as conn:
            conn.execute("DELETE FROM cards WHERE id = ?", (card_id,))
            conn.execute(
                "UPDATE cards SET position = position - 1 WHERE column_id = ? AND position > ?",
                (card.column_id, card.position)
            )
            conn.commit()
    except sqlite3.Error as e:
        logger.error(f"Failed to delete card '{card_id}': {e}")
        return False

    logger.log_card_operation("delete", card_id)
    return True


def assign_clusters(board_id: str, assignments: Dict[str, str]) -> bool:
    """Replace every cluster id on a board with a fresh card_id -> cluster_id mapping."""
    try:
        with get_db() as conn:
            conn.execute("UPDATE cards SET cluster_id = NULL WHERE board_id = ?", (board_id,))
            conn.executemany(
                "UPDATE cards SET cluster_id = ? WHERE id = ? AND board_id = ?",
                [(cluster_id, card_id, board_id) for card_id, cluster_id in assignments.items()]
            )
            conn.commit()
            return True
    except sqlite3.Error as e:
        logger.error(f"Failed to assign clusters on board '{board_id}': {e}")
        return False


def get_card_count(board_id: str = None) -> int:
    """Count cards on one board or across all boards."""
    try:
        with get_db() as conn:
            if board_id:
                (count,) = conn.execute("SELECT COUNT(*) FROM cards WHERE board_id = ?", (board_id,)).fetchone()
            else:
                (count,) = conn.execute("SELECT COUNT(*) FROM cards").fetchone()
            return count
    except sqlite3.Error as e:
        logger.error(f"Failed to count cards: {e}")
        return 0
