"""
Idea board configuration - single point of control.
Values come from the environment (optionally a .env file).
"""

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from util.logging import logger

load_dotenv()

# Database path configuration
DB_PATH = os.getenv("DB_PATH", "./data/ideaboard.db")

DEBUG = os.getenv("DEBUG", "true").lower() == "true"
logger.set_debug(DEBUG)

# Embedding configuration
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "hash")  # hash|sentence_transformers
EMBED_DIMENSION = int(os.getenv("EMBED_DIMENSION", "384"))
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "all-MiniLM-L6-v2")

# Clustering and search calibration for the hash embedding's score distribution
CLUSTER_THRESHOLD = float(os.getenv("CLUSTER_THRESHOLD", "0.3"))
SEARCH_MIN_SCORE = float(os.getenv("SEARCH_MIN_SCORE", "0.2"))
SEARCH_TOP_K = int(os.getenv("SEARCH_TOP_K", "10"))

# Text generation collaborator (suggestions, summaries, mood)
TEXT_PROVIDER = os.getenv("TEXT_PROVIDER", "mock")  # mock|ollama
OLLAMA_HOST = os.getenv("OLLAMA_HOST", "http://localhost:11434")
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "llama3.1:8b")
LLM_TIMEOUT_SEC = float(os.getenv("LLM_TIMEOUT_SEC", "30"))
SUGGESTION_CONTEXT_LIMIT = int(os.getenv("SUGGESTION_CONTEXT_LIMIT", "20"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000")

# Version string
VERSION = "1.0.0"


@lru_cache(maxsize=None)
def _build_embedding_provider(provider: str, dimension: int, model_name: str):
    if provider == "sentence_transformers":
        from src.vector.embeddings import SentenceTransformerEmbedding
        return SentenceTransformerEmbedding(model_name)

    # Unknown providers fall back to the deterministic hash embedding
    from src.vector.embeddings import FeatureHashEmbedding
    return FeatureHashEmbedding(dimension=dimension)


def get_embedding_provider():
    """Get the configured embedding provider; one shared instance per configuration."""
    return _build_embedding_provider(EMBED_PROVIDER, EMBED_DIMENSION, EMBED_MODEL_NAME)


def get_text_provider():
    """Get configured text-generation provider implementation."""
    if TEXT_PROVIDER == "ollama":
        from src.agents.providers import OllamaTextProvider
        return OllamaTextProvider.from_settings(
            host=OLLAMA_HOST,
            model_name=OLLAMA_MODEL,
            timeout=LLM_TIMEOUT_SEC
        )

    from src.agents.providers import MockTextProvider
    return MockTextProvider()


def get_cors_origins():
    """Parse the comma separated CORS origin list."""
    return [origin.strip() for origin in CORS_ORIGINS.split(",") if origin.strip()]


def debug_enabled():
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG", "true").lower() == "true"


def ensure_db_directory(db_path: str = None):
    """Ensure the database directory exists."""
    Path(db_path or DB_PATH).parent.mkdir(parents=True, exist_ok=True)


def validate_config():
    """Validate configuration and return any issues."""
    issues = []

    if EMBED_PROVIDER not in ["hash", "sentence_transformers"]:
        issues.append(f"Invalid EMBED_PROVIDER: {EMBED_PROVIDER}")

    if TEXT_PROVIDER not in ["mock", "ollama"]:
        issues.append(f"Invalid TEXT_PROVIDER: {TEXT_PROVIDER}")

    if EMBED_DIMENSION < 1:
        issues.append("EMBED_DIMENSION must be >= 1")

    if not 0 < CLUSTER_THRESHOLD <= 1:
        issues.append("CLUSTER_THRESHOLD must be in (0, 1]")

    if SEARCH_TOP_K < 1:
        issues.append("SEARCH_TOP_K must be >= 1")

    if LLM_TIMEOUT_SEC <= 0:
        issues.append("LLM_TIMEOUT_SEC must be > 0")

    return issues
