# tests/test_configuration.py
"""Tests for provider and storage configuration objects."""

import dataclasses
import importlib.util
from pathlib import Path

import pytest

from corpusvault.configuration import (
    InMemoryStorage,
    IPFSStorage,
    LiteLLMProvider,
    LocalStorage,
    ProviderConfig,
    StorageConfig,
)
from corpusvault.embedder import ClientEmbedder
from corpusvault.settings import Settings
from corpusvault.stores import (
    InMemoryContentStore,
    InMemoryCorpusRegistry,
    IPFSContentStore,
    LocalContentStore,
    SQLiteCorpusRegistry,
)

HAS_LITELLM = importlib.util.find_spec("litellm") is not None


class TestLocalStorage:
    def test_build_stores(self, temp_dir):
        content_store, corpus_registry = LocalStorage(temp_dir).build_stores()

        assert isinstance(content_store, LocalContentStore)
        assert isinstance(corpus_registry, SQLiteCorpusRegistry)
        assert (Path(temp_dir) / "content").is_dir()
        assert (Path(temp_dir) / "corpora.db").exists()

    def test_build_stores_creates_directory(self, temp_dir):
        data_dir = Path(temp_dir) / "new" / "data"
        LocalStorage(str(data_dir)).build_stores()
        assert data_dir.is_dir()

    def test_is_frozen_dataclass(self, temp_dir):
        storage = LocalStorage(temp_dir)
        with pytest.raises(dataclasses.FrozenInstanceError):
            storage.data_dir = "/other"  # type: ignore[misc]


class TestIPFSStorage:
    def test_build_stores(self, temp_dir):
        storage = IPFSStorage(str(Path(temp_dir) / "corpora.db"), api_url="http://node:5001", pin=False)

        content_store, corpus_registry = storage.build_stores()

        assert isinstance(content_store, IPFSContentStore)
        assert content_store.api_url == "http://node:5001"
        assert content_store.pin is False
        assert isinstance(corpus_registry, SQLiteCorpusRegistry)


class TestInMemoryStorage:
    def test_build_stores(self):
        content_store, corpus_registry = InMemoryStorage().build_stores()
        assert isinstance(content_store, InMemoryContentStore)
        assert isinstance(corpus_registry, InMemoryCorpusRegistry)

    def test_fresh_stores_each_time(self):
        storage = InMemoryStorage()
        assert storage.build_stores()[0] is not storage.build_stores()[0]


@pytest.mark.skipif(not HAS_LITELLM, reason="litellm not installed")
class TestLiteLLMProvider:
    def test_build_embedder_uses_settings(self):
        provider = LiteLLMProvider(llm="ollama/llama3.1:8b", embedding="ollama/nomic-embed-text")

        embedder = provider.build_embedder(Settings(embedding_batch_size=2, embedding_batch_delay=0.5))

        assert isinstance(embedder, ClientEmbedder)
        assert embedder.batch_size == 2
        assert embedder.batch_delay == 0.5

    def test_build_llm_client(self):
        from corpusvault.providers.litellm import LiteLLMClient

        provider = LiteLLMProvider(
            llm="ollama/llama3.1:8b",
            embedding="ollama/nomic-embed-text",
            api_base="http://localhost:11434",
        )

        client = provider.build_llm_client(Settings(num_retries=7))

        assert isinstance(client, LiteLLMClient)
        assert client.model == "ollama/llama3.1:8b"
        assert client.num_retries == 7
        assert client.api_base == "http://localhost:11434"

    def test_is_frozen_dataclass(self):
        provider = LiteLLMProvider(llm="a/b", embedding="c/d")
        with pytest.raises(dataclasses.FrozenInstanceError):
            provider.llm = "x/y"  # type: ignore[misc]


class TestProtocols:
    def test_litellm_provider_satisfies_protocol(self):
        assert isinstance(LiteLLMProvider(llm="a/b", embedding="c/d"), ProviderConfig)

    @pytest.mark.parametrize(
        "storage",
        [LocalStorage("./data"), IPFSStorage("./data/corpora.db"), InMemoryStorage()],
    )
    def test_storage_satisfies_protocol(self, storage):
        assert isinstance(storage, StorageConfig)
