# src/corpusvault/configuration/__init__.py
"""Configuration objects for corpusvault.

Instead of wiring every component by hand, you pass configuration objects
that know how to build their components.

Provider configurations (build embedding and generation components):
- LiteLLMProvider: Uses LiteLLM for generation and embedding calls

Storage configurations (build the content store and corpus registry):
- LocalStorage: Content files + SQLite pointer registry on local disk
- IPFSStorage: IPFS HTTP API + SQLite pointer registry
- InMemoryStorage: Nothing persisted (tests, demos)

Example:
    from corpusvault import CorpusVault, LiteLLMProvider, LocalStorage

    vault = CorpusVault(
        provider=LiteLLMProvider(llm="openai/gpt-4o", embedding="text-embedding-3-small"),
        storage=LocalStorage("./data"),
        secret="change-me",
    )
"""

from corpusvault.configuration.base import ProviderConfig, StorageConfig
from corpusvault.configuration.providers import LiteLLMProvider
from corpusvault.configuration.storage import InMemoryStorage, IPFSStorage, LocalStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    "IPFSStorage",
    "InMemoryStorage",
]
