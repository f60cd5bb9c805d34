# src/corpusvault/embedder/client.py
"""Client-based embedder with throughput-limited batching."""

import asyncio
import time
from collections.abc import Iterator

from loguru import logger

from corpusvault.embedder.base import Embedder
from corpusvault.exceptions import BackendUnavailableError, ValidationError
from corpusvault.providers.base import EmbeddingClient


class ClientEmbedder(Embedder):
    """Embedder that sends texts to an EmbeddingClient in small batches.

    Batches are sent one after another with ``batch_delay`` seconds between
    them to stay under backend throughput limits. Vectors come back in input
    order. If any batch fails the whole call fails with
    BackendUnavailableError; nothing is dropped silently.

    Example:
        from corpusvault.providers.litellm import LiteLLMEmbeddingClient
        from corpusvault.embedder import ClientEmbedder

        client = LiteLLMEmbeddingClient(model="ollama/nomic-embed-text")
        embedder = ClientEmbedder(embedding_client=client, batch_size=3, batch_delay=0.05)
    """

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        batch_size: int = 5,
        batch_delay: float = 0.1,
    ) -> None:
        """Initialize the embedder.

        Args:
            embedding_client: Any EmbeddingClient implementation
            batch_size: Texts per backend request
            batch_delay: Seconds to wait between consecutive batches
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        if batch_delay < 0:
            raise ValueError(f"batch_delay must not be negative, got {batch_delay}")
        self._client = embedding_client
        self.batch_size = batch_size
        self.batch_delay = batch_delay

    def embed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text."""
        return self.embed_texts([text])[0]

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        vectors: list[list[float]] = []
        for index, batch in self._batches(texts):
            if index > 0 and self.batch_delay:
                time.sleep(self.batch_delay)
            try:
                vectors.extend(self._client.embed(batch))
            except Exception as e:
                raise self._batch_error(index, e) from e
        return self._checked(texts, vectors)

    async def aembed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text (async)."""
        return (await self.aembed_texts([text]))[0]

    async def aembed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (async, batched)."""
        vectors: list[list[float]] = []
        for index, batch in self._batches(texts):
            if index > 0 and self.batch_delay:
                await asyncio.sleep(self.batch_delay)
            try:
                vectors.extend(await self._client.aembed(batch))
            except Exception as e:
                raise self._batch_error(index, e) from e
        return self._checked(texts, vectors)

    def is_available(self) -> bool:
        return self._client.is_available()

    def _batches(self, texts: list[str]) -> Iterator[tuple[int, list[str]]]:
        total = (len(texts) + self.batch_size - 1) // self.batch_size
        for index, start in enumerate(range(0, len(texts), self.batch_size)):
            logger.debug(f"Embedding batch {index + 1}/{total}")
            yield index, texts[start : start + self.batch_size]

    def _batch_error(self, index: int, error: Exception) -> BackendUnavailableError:
        if isinstance(error, BackendUnavailableError):
            return error
        return BackendUnavailableError(f"Embedding batch {index + 1} failed: {error}")

    @staticmethod
    def _checked(texts: list[str], vectors: list[list[float]]) -> list[list[float]]:
        if len(vectors) != len(texts):
            raise BackendUnavailableError(
                f"Embedding count mismatch: {len(texts)} texts, {len(vectors)} vectors"
            )
        if not vectors:
            return vectors
        if any(len(v) == 0 for v in vectors):
            raise BackendUnavailableError("Embedding backend returned an empty vector")
        dimensions = {len(v) for v in vectors}
        if len(dimensions) > 1:
            raise ValidationError(
                f"Embedding backend returned mixed dimensions: {sorted(dimensions)}"
            )
        return vectors
