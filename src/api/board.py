"""
Board, column and card endpoints.
Card text changes recompute embedding and mood before the single write.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..agents.assistant import IdeaAssistant
from ..core import dao
from ..core.embedding_sync import card_text, embed_card_text
from ..vector.embeddings import IEmbeddingProvider
from .dependencies import get_assistant, get_embedding_provider, require_board
from .schemas import (
    BoardCreateRequest,
    BoardUpdateRequest,
    BoardResponse,
    BoardDetailResponse,
    ColumnCreateRequest,
    ColumnResponse,
    CardCreateRequest,
    CardUpdateRequest,
    CardMoveRequest,
    CardResponse
)

router = APIRouter()


def _column_response(column) -> ColumnResponse:
    return ColumnResponse(id=column.id, board_id=column.board_id, title=column.title, position=column.position)


@router.post("/boards", response_model=BoardResponse, status_code=201)
def create_board_endpoint(request: BoardCreateRequest):
    board = dao.create_board(request.name)
    if not board:
        raise HTTPException(status_code=500, detail="Failed to create board")
    return BoardResponse.model_validate(board)


@router.get("/boards", response_model=List[BoardResponse])
def list_boards_endpoint():
    return [BoardResponse.model_validate(board) for board in dao.list_boards()]


@router.get("/boards/{board_id}", response_model=BoardDetailResponse)
def get_board_endpoint(board_id: str):
    board = require_board(board_id)
    return BoardDetailResponse(
        id=board.id,
        name=board.name,
        created_at=board.created_at,
        updated_at=board.updated_at,
        columns=[_column_response(column) for column in dao.list_columns(board_id)],
        cards=[CardResponse.from_record(card) for card in dao.list_cards(board_id)]
    )


@router.put("/boards/{board_id}", response_model=BoardResponse)
def update_board_endpoint(board_id: str, request: BoardUpdateRequest):
    require_board(board_id)
    board = dao.update_board(board_id, request.name)
    if not board:
        raise HTTPException(status_code=500, detail="Failed to update board")
    return BoardResponse.model_validate(board)


@router.delete("/boards/{board_id}")
def delete_board_endpoint(board_id: str):
    require_board(board_id)
    if not dao.delete_board(board_id):
        raise HTTPException(status_code=500, detail="Failed to delete board")
    return {"success": True, "board_id": board_id}


@router.post("/boards/{board_id}/columns", response_model=ColumnResponse, status_code=201)
def create_column_endpoint(board_id: str, request: ColumnCreateRequest):
    require_board(board_id)
    column = dao.create_column(board_id, request.title)
    if not column:
        raise HTTPException(status_code=500, detail="Failed to create column")
    return _column_response(column)


@router.post("/boards/{board_id}/cards", response_model=CardResponse, status_code=201)
def create_card_endpoint(
    board_id: str,
    request: CardCreateRequest,
    embedding_provider: IEmbeddingProvider = Depends(get_embedding_provider),
    assistant: IdeaAssistant = Depends(get_assistant)
):
    require_board(board_id)
    column = dao.get_column(request.column_id)
    if not column or column.board_id != board_id:
        raise HTTPException(status_code=404, detail="Column not found")

    embedding = embed_card_text(embedding_provider, request.title, request.description)
    mood = assistant.analyze_mood(card_text(request.title, request.description))

    card = dao.create_card(
        board_id=board_id,
        column_id=request.column_id,
        title=request.title,
        description=request.description,
        embedding=embedding,
        mood=mood
    )
    if not card:
        raise HTTPException(status_code=500, detail="Failed to create card")
    return CardResponse.from_record(card)


@router.patch("/cards/{card_id}", response_model=CardResponse)
def update_card_endpoint(
    card_id: str,
    request: CardUpdateRequest,
    embedding_provider: IEmbeddingProvider = Depends(get_embedding_provider),
    assistant: IdeaAssistant = Depends(get_assistant)
):
    card = dao.get_card(card_id)
    if not card:
        raise HTTPException(status_code=404, detail="Card not found")

    if request.title is None and request.description is None:
        return CardResponse.from_record(card)

    title = request.title if request.title is not None else card.title
    description = request.description if request.description is not None else card.description

    embedding = embed_card_text(embedding_provider, title, description)
    mood = assistant.analyze_mood(card_text(title, description))

    updated = dao.update_card_content(card_id, title, description, embedding, mood)
    if not updated:
        raise HTTPException(status_code=500, detail="Failed to update card")
    return CardResponse.from_record(updated)


@router.put("/cards/{card_id}/move", response_model=CardResponse)
def move_card_endpoint(card_id: str, request: CardMoveRequest):
    if not dao.get_card(card_id):
        raise HTTPException(status_code=404, detail="Card not found")

    moved = dao.move_card(card_id, request.column_id, request.position)
    if not moved:
        raise HTTPException(status_code=400, detail="Invalid target column")
    return CardResponse.from_record(moved)


@router.delete("/cards/{card_id}")
def delete_card_endpoint(card_id: str):
    if not dao.delete_card(card_id):
        raise HTTPException(status_code=404, detail="Card not found")
    return {"success": True, "card_id": card_id}
