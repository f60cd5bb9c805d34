# src/corpusvault/configuration/providers/litellm.py
"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from corpusvault.embedder import Embedder
    from corpusvault.providers import LLMClient
    from corpusvault.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for generation and embedding calls.

    LiteLLM provides a unified interface to 100+ providers including
    OpenAI, Anthropic, Gemini, Ollama and more.

    Args:
        llm: LiteLLM model identifier for answer synthesis.
             Examples: "gemini/gemini-1.5-flash", "ollama/llama3.1:8b"
        embedding: LiteLLM model identifier for embeddings.
                   Examples: "gemini/text-embedding-004", "ollama/nomic-embed-text"
        api_key: Optional API key passed to both clients.
        api_base: Optional API base URL (e.g. a self-hosted Ollama server).

    Example:
        provider = LiteLLMProvider(
            llm="ollama/llama3.1:8b",
            embedding="ollama/nomic-embed-text",
            api_base="http://localhost:11434",
        )
    """

    llm: str
    embedding: str
    api_key: str | None = None
    api_base: str | None = None

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build a ClientEmbedder using the LiteLLM embedding client.

        Args:
            settings: Settings containing batch size, batch delay and num_retries.
        """
        from corpusvault.embedder import ClientEmbedder
        from corpusvault.providers.litellm import LiteLLMEmbeddingClient

        embedding_client = LiteLLMEmbeddingClient(
            model=self.embedding,
            num_retries=settings.num_retries,
            api_key=self.api_key,
            api_base=self.api_base,
        )
        return ClientEmbedder(
            embedding_client=embedding_client,
            batch_size=settings.embedding_batch_size,
            batch_delay=settings.embedding_batch_delay,
        )

    def build_llm_client(self, settings: Settings | None = None) -> LLMClient:
        """Build a LiteLLMClient for answer synthesis.

        Args:
            settings: Optional settings containing num_retries. If None,
                     uses default retry value.
        """
        from corpusvault.providers.litellm import LiteLLMClient

        num_retries = settings.num_retries if settings else 3
        return LiteLLMClient(
            model=self.llm,
            num_retries=num_retries,
            api_key=self.api_key,
            api_base=self.api_base,
        )
