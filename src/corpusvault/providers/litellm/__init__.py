# src/corpusvault/providers/litellm/__init__.py
"""LiteLLM provider clients for corpusvault.

This module contains LiteLLM-based client implementations:
- LiteLLMClient: Text generation using LiteLLM
- LiteLLMEmbeddingClient: Embeddings using LiteLLM
- ChatModels: Curated chat model constants
- EmbeddingModels: Curated embedding model constants

Usage:
    from corpusvault.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels
    from corpusvault.embedder import ClientEmbedder

    client = LiteLLMEmbeddingClient(model=EmbeddingModels.OLLAMA_NOMIC_EMBED)
    embedder = ClientEmbedder(embedding_client=client)
"""

from corpusvault.providers.litellm.client import LiteLLMClient, LiteLLMEmbeddingClient
from corpusvault.providers.litellm.models import ChatModels, EmbeddingModels

__all__ = [
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # Clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
