from unittest.mock import MagicMock

import ollama
import pytest

from src.agents.providers import OllamaTextProvider, MockTextProvider, TextProviderError


def test_ollama_provider_returns_stripped_content():
    client = MagicMock()
    client.chat.return_value = {'message': {'content': '  positive \n'}}
    provider = OllamaTextProvider(client, "llama3.1:8b")

    assert provider.generate("prompt", temperature=0.3, max_tokens=10) == "positive"

    kwargs = client.chat.call_args.kwargs
    assert kwargs['model'] == "llama3.1:8b"
    assert kwargs['messages'] == [{'role': 'user', 'content': 'prompt'}]
    assert kwargs['options'] == {'temperature': 0.3, 'num_predict': 10}


def test_ollama_model_error_is_wrapped():
    client = MagicMock()
    client.chat.side_effect = ollama.ResponseError("model not found", 404)
    provider = OllamaTextProvider(client, "missing-model")

    with pytest.raises(TextProviderError):
        provider.generate("prompt")


def test_ollama_connection_error_is_wrapped():
    client = MagicMock()
    client.chat.side_effect = ConnectionError("refused")
    provider = OllamaTextProvider(client, "llama3.1:8b")

    with pytest.raises(TextProviderError, match="refused"):
        provider.generate("prompt")


def test_from_settings_builds_client():
    provider = OllamaTextProvider.from_settings("http://localhost:11434", "llama3.1:8b", timeout=5)
    assert isinstance(provider.client, ollama.Client)
    assert provider.model_name == "llama3.1:8b"
    assert provider.name == "ollama"


def test_mock_provider_is_silent():
    assert MockTextProvider().generate("anything") == ""
