"""
Text-generation providers used for suggestions, summaries and mood.
Providers are constructed explicitly and passed to their users.
"""

from abc import ABC, abstractmethod

import ollama


class TextProviderError(Exception):
    """Raised when a text-generation provider cannot produce a response."""


class ITextGenerationProvider(ABC):
    """Prompt in, text out."""

    name = "base"

    @abstractmethod
    def generate(self, prompt: str, temperature: float = 0.7, max_tokens: int = 250) -> str:
        """
        Complete a prompt.

        Raises:
            TextProviderError: when the provider fails or times out
        """
        pass


class OllamaTextProvider(ITextGenerationProvider):
    """
    Provider backed by a local Ollama instance.
    The client carries the request timeout so a slow model never blocks indefinitely.
    """

    name = "ollama"

    def __init__(self, client: ollama.Client, model_name: str):
        self.client = client
        self.model_name = model_name

    @classmethod
    def from_settings(cls, host: str, model_name: str, timeout: float) -> "OllamaTextProvider":
        return cls(ollama.Client(host=host, timeout=timeout), model_name)

    def generate(self, prompt: str, temperature: float = 0.7, max_tokens: int = 250) -> str:
        try:
            response = self.client.chat(
                model=self.model_name,
                messages=[{'role': 'user', 'content': prompt}],
                options={
                    'temperature': temperature,
                    'num_predict': max_tokens
                }
            )
        except ollama.ResponseError as e:
            raise TextProviderError(f"Ollama model error: {e}") from e
        except Exception as e:
            # Connection refused, timeouts and transport errors
            raise TextProviderError(f"Ollama request failed: {e}") from e

        return (response['message']['content'] or '').strip()


class MockTextProvider(ITextGenerationProvider):
    """
    Offline provider for development and tests.
    Always answers with empty text, which sends callers down their templated fallbacks.
    """

    name = "mock"

    def generate(self, prompt: str, temperature: float = 0.7, max_tokens: int = 250) -> str:
        return ""
