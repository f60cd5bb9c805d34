# src/corpusvault/providers/litellm/client.py
"""LiteLLM client implementations for generation and embedding APIs."""

from typing import Any

import litellm
from loguru import logger

from corpusvault.providers.base import EmbeddingClient, LLMClient
from corpusvault.providers.litellm.models import ChatModels, EmbeddingModels


def _credentials_present(model: str, api_key: str | None) -> bool:
    """Check whether LiteLLM has what it needs to call ``model``."""
    if api_key:
        return True
    try:
        env = litellm.validate_environment(model=model)
    except Exception as e:
        logger.warning(f"Could not validate environment for {model}: {e}")
        return False
    return bool(env.get("keys_in_environment")) or not env.get("missing_keys")


class LiteLLMClient(LLMClient):
    """LiteLLM-based client for text generation.

    Supports any model available through LiteLLM, including local Ollama
    models ("ollama/...") and hosted APIs (Gemini, OpenAI, Anthropic, ...).

    Example:
        from corpusvault.providers.litellm import LiteLLMClient, ChatModels

        client = LiteLLMClient(model=ChatModels.OLLAMA_LLAMA_31_8B)
        answer = client.generate("Hello", system_prompt="Be brief.")
    """

    def __init__(
        self,
        model: str = ChatModels.GEMINI_15_FLASH,
        num_retries: int = 3,
        api_key: str | None = None,
        api_base: str | None = None,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: LiteLLM model identifier.
                   Examples: "ollama/llama3.1:8b", "gemini/gemini-1.5-flash"
            num_retries: Number of retries on rate limit errors. LiteLLM handles
                        exponential backoff automatically. Default: 3.
            api_key: Optional API key (otherwise read by LiteLLM from the environment)
            api_base: Optional endpoint override, e.g. a local Ollama URL
        """
        self.model = model
        self.num_retries = num_retries
        self.api_key = api_key
        self.api_base = api_base

    def _completion_kwargs(self, messages: list[dict], temperature: float | None) -> dict:
        completion_kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "drop_params": True,
            "num_retries": self.num_retries,
        }
        if temperature is not None:
            completion_kwargs["temperature"] = temperature
        if self.api_key:
            completion_kwargs["api_key"] = self.api_key
        if self.api_base:
            completion_kwargs["api_base"] = self.api_base
        return completion_kwargs

    def _content(self, response: Any) -> str:
        if not response.choices:
            raise ValueError(f"LLM returned no choices for model {self.model}")
        content = response.choices[0].message.content
        if content is None:
            raise ValueError(f"LLM returned None content for model {self.model}")
        return str(content)

    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
    ) -> str:
        """Generate a completion using LiteLLM."""
        response = litellm.completion(**self._completion_kwargs(messages, temperature))
        return self._content(response)

    async def acomplete(
        self,
        messages: list[dict],
        temperature: float | None = None,
    ) -> str:
        """Generate a completion using LiteLLM (async)."""
        response = await litellm.acompletion(**self._completion_kwargs(messages, temperature))
        return self._content(response)

    def is_available(self) -> bool:
        return _credentials_present(self.model, self.api_key)


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Example:
        from corpusvault.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.OLLAMA_NOMIC_EMBED)
        vectors = client.embed(["Hello world", "How are you?"])
    """

    def __init__(
        self,
        model: str = EmbeddingModels.GEMINI_004,
        num_retries: int = 3,
        api_key: str | None = None,
        api_base: str | None = None,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
                   Examples: "ollama/nomic-embed-text", "gemini/text-embedding-004"
            num_retries: Number of retries on rate limit errors. Default: 3.
            api_key: Optional API key
            api_base: Optional endpoint override
        """
        self.model = model
        self.num_retries = num_retries
        self.api_key = api_key
        self.api_base = api_base

    def _embedding_kwargs(self, texts: list[str]) -> dict:
        embedding_kwargs: dict[str, Any] = {
            "model": self.model,
            "input": texts,
            "num_retries": self.num_retries,
        }
        if self.api_key:
            embedding_kwargs["api_key"] = self.api_key
        if self.api_base:
            embedding_kwargs["api_base"] = self.api_base
        return embedding_kwargs

    @staticmethod
    def _vectors(response: Any) -> list[list[float]]:
        # Sort by index to maintain order
        sorted_data = sorted(response.data, key=lambda x: x["index"])
        return [item["embedding"] for item in sorted_data]

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []
        return self._vectors(litellm.embedding(**self._embedding_kwargs(texts)))

    async def aembed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM (async)."""
        if not texts:
            return []
        return self._vectors(await litellm.aembedding(**self._embedding_kwargs(texts)))

    def is_available(self) -> bool:
        return _credentials_present(self.model, self.api_key)
