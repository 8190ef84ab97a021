"""
FastAPI dependencies. Override these in tests via app.dependency_overrides.
"""

from fastapi import HTTPException

from ..agents.assistant import IdeaAssistant
from ..core import config
from ..core import dao
from ..core.schema import BoardRecord
from ..vector.embeddings import IEmbeddingProvider


def get_embedding_provider() -> IEmbeddingProvider:
    return config.get_embedding_provider()


def get_assistant() -> IdeaAssistant:
    return IdeaAssistant(config.get_text_provider())


def require_board(board_id: str) -> BoardRecord:
    board = dao.get_board(board_id)
    if not board:
        raise HTTPException(status_code=404, detail="Board not found")
    return board
