import logging
import sys
import types

import numpy as np
import pytest

from src.agents.providers import MockTextProvider, OllamaTextProvider
from src.core import config
from src.vector.embeddings import FeatureHashEmbedding, SentenceTransformerEmbedding
from util.logging import StructuredLogger, sanitize_payload


@pytest.fixture
def fresh_provider_cache():
    config._build_embedding_provider.cache_clear()
    yield
    config._build_embedding_provider.cache_clear()


@pytest.fixture
def counting_sentence_transformers(monkeypatch):
    """Stand-in sentence_transformers module that counts model loads."""
    loads = []

    class CountingModel:
        def __init__(self, model_name):
            loads.append(model_name)

        def encode(self, text, convert_to_numpy=True, normalize_embeddings=True):
            return np.array([0.6, 0.8], dtype=np.float32)

        def get_sentence_embedding_dimension(self):
            return 2

    module = types.ModuleType("sentence_transformers")
    module.SentenceTransformer = CountingModel
    monkeypatch.setitem(sys.modules, "sentence_transformers", module)
    return loads


def test_default_providers():
    assert isinstance(config.get_embedding_provider(), FeatureHashEmbedding)
    assert config.get_embedding_provider().get_dimension() == config.EMBED_DIMENSION
    assert isinstance(config.get_text_provider(), MockTextProvider)


def test_embedding_provider_is_shared(fresh_provider_cache):
    assert config.get_embedding_provider() is config.get_embedding_provider()


def test_sentence_transformer_model_loads_once(monkeypatch, fresh_provider_cache, counting_sentence_transformers):
    monkeypatch.setattr(config, "EMBED_PROVIDER", "sentence_transformers")

    for _ in range(3):
        vector = config.get_embedding_provider().embed_text("solar panels")
        assert len(vector) == 2

    assert counting_sentence_transformers == [config.EMBED_MODEL_NAME]


def test_changed_configuration_builds_new_provider(monkeypatch, fresh_provider_cache):
    default = config.get_embedding_provider()
    monkeypatch.setattr(config, "EMBED_DIMENSION", 64)

    resized = config.get_embedding_provider()
    assert resized is not default
    assert resized.get_dimension() == 64


def test_configured_providers(monkeypatch, fresh_provider_cache):
    monkeypatch.setattr(config, "EMBED_PROVIDER", "sentence_transformers")
    monkeypatch.setattr(config, "TEXT_PROVIDER", "ollama")

    embedding_provider = config.get_embedding_provider()
    assert isinstance(embedding_provider, SentenceTransformerEmbedding)
    assert embedding_provider.model_name == config.EMBED_MODEL_NAME

    text_provider = config.get_text_provider()
    assert isinstance(text_provider, OllamaTextProvider)
    assert text_provider.model_name == config.OLLAMA_MODEL


def test_validate_config(monkeypatch):
    assert config.validate_config() == []

    monkeypatch.setattr(config, "TEXT_PROVIDER", "gpt")
    monkeypatch.setattr(config, "CLUSTER_THRESHOLD", 0.0)
    issues = config.validate_config()
    assert "Invalid TEXT_PROVIDER: gpt" in issues
    assert "CLUSTER_THRESHOLD must be in (0, 1]" in issues


def test_cors_origins(monkeypatch):
    monkeypatch.setattr(config, "CORS_ORIGINS", "http://a.test, http://b.test,,")
    assert config.get_cors_origins() == ["http://a.test", "http://b.test"]


def test_structured_log_format(caplog):
    test_logger = StructuredLogger("idea_board.test")

    with caplog.at_level(logging.INFO, logger="idea_board.test"):
        test_logger.log_cluster_run("board-1", 0.3, 4, 2)
        test_logger.log_provider_failure("ollama", "mood", RuntimeError("timeout"))

    assert "Operation: cluster.run, Status: success" in caplog.text
    assert "'cluster_count': 2" in caplog.text
    assert "Operation: provider.mood, Status: fallback" in caplog.text
    assert any(record.levelno == logging.WARNING for record in caplog.records)


def test_sanitize_payload():
    payload = {"title": "x" * 150, "api_key": "secret", "tags": ["short"]}
    sanitized = sanitize_payload(payload)
    assert sanitized["title"] == "x" * 100 + "..."
    assert sanitized["api_key"] == "[REDACTED]"
    assert sanitized["tags"] == ["short"]


def test_debug_level_follows_setting():
    test_logger = StructuredLogger("idea_board.level")

    test_logger.set_debug(True)
    assert test_logger.debug_enabled()

    test_logger.set_debug(False)
    assert not test_logger.debug_enabled()
