# src/corpusvault/providers/__init__.py
"""Backend providers for corpusvault.

This module contains generation and embedding backend abstractions:
- LLMClient: Abstract base class for text generation backends
- EmbeddingClient: Abstract base class for embedding backends
- LiteLLM implementations (requires: pip install corpusvault[litellm])

Usage:
    from corpusvault.providers import LLMClient, EmbeddingClient
    from corpusvault.providers.litellm import LiteLLMClient, ChatModels
"""

from corpusvault.providers.base import EmbeddingClient, LLMClient

try:
    from corpusvault.providers.litellm import (
        ChatModels,
        EmbeddingModels,
        LiteLLMClient,
        LiteLLMEmbeddingClient,
    )
except ImportError:
    from corpusvault._optional import _create_missing_dependency_class

    class ChatModels:  # type: ignore[no-redef]
        """Placeholder - requires litellm package."""

        pass

    class EmbeddingModels:  # type: ignore[no-redef]
        """Placeholder - requires litellm package."""

        pass

    LiteLLMClient = _create_missing_dependency_class(  # type: ignore[misc,assignment]
        "LiteLLMClient", "litellm"
    )
    LiteLLMEmbeddingClient = _create_missing_dependency_class(  # type: ignore[misc,assignment]
        "LiteLLMEmbeddingClient", "litellm"
    )

__all__ = [
    # ABCs
    "LLMClient",
    "EmbeddingClient",
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # LiteLLM clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
