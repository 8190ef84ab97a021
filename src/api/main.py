"""
Idea board API - boards, cards and the semantic features built on their embeddings.
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from util.logging import logger

from .schemas import HealthResponse
from .board import router as board_router
from .ai import router as ai_router
from ..core import config
from ..core.dao import get_card_count
from ..core.db import health_check
from ..core.config import VERSION, debug_enabled, get_cors_origins

# Initialize the FastAPI application
app = FastAPI(
    title="Idea Board API",
    version=VERSION,
    description="Collaborative idea board with semantic clustering and search",
    docs_url="/docs" if debug_enabled() else None,
    redoc_url="/redoc" if debug_enabled() else None
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(board_router, tags=["boards"])
app.include_router(ai_router, prefix="/ai", tags=["ai"])


@app.get("/health", response_model=HealthResponse)
def health_check_endpoint():
    """Check system health."""
    db_health = health_check()

    return HealthResponse(
        status="healthy" if db_health else "unhealthy",
        version=VERSION,
        db_health=db_health,
        card_count=get_card_count(),
        embed_provider=config.EMBED_PROVIDER,
        text_provider=config.TEXT_PROVIDER
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Handle all unhandled exceptions."""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}")
    content = {"detail": "Internal server error"}
    if debug_enabled():
        content["debug"] = str(exc)
    return JSONResponse(status_code=500, content=content)
