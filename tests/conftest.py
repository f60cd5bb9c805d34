"""Shared pytest fixtures."""

import re
import tempfile
from dataclasses import dataclass

import pytest

from corpusvault.crypto import FieldCipher
from corpusvault.embedder import ClientEmbedder
from corpusvault.models import Chunk, Document, IngestionRequest, VectorRecord
from corpusvault.providers import EmbeddingClient, LLMClient
from corpusvault.settings import Settings
from corpusvault.stores import (
    InMemoryContentStore,
    InMemoryCorpusRegistry,
    SnapshotCodec,
    VectorStore,
)

# Each vocabulary word owns one axis of the fake embedding space.
# Texts about different topics share no axes and score exactly 0.
VOCABULARY = [
    # medicine
    "heart",
    "blood",
    "cardiac",
    "artery",
    "patient",
    # programming
    "python",
    "code",
    "compiler",
    "function",
    "variable",
    # weather
    "rain",
    "cloud",
    "storm",
]

MEDICAL_TEXT = (
    "The heart pumps blood through every artery. A cardiac patient needs care. "
    "Blood pressure in the artery rises when the heart works harder."
)
PROGRAMMING_TEXT = (
    "A python function takes a variable. The compiler turns code into bytecode. "
    "Every function and variable in python code is an object."
)
WEATHER_TEXT = "Rain falls from a storm cloud. The storm brings rain and cloud cover."


def vocabulary_vector(text: str) -> list[float]:
    words = re.findall(r"[a-z]+", text.lower())
    return [float(words.count(term)) for term in VOCABULARY]


class VocabularyEmbeddingClient(EmbeddingClient):
    """Embedding client that counts vocabulary words, recording every batch."""

    def __init__(self, fail: bool = False, available: bool = True) -> None:
        self.calls: list[list[str]] = []
        self.fail = fail
        self.available = available

    def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        if self.fail:
            raise ConnectionError("embedding backend unreachable")
        return [vocabulary_vector(t) for t in texts]

    def is_available(self) -> bool:
        return self.available


class FakeLLMClient(LLMClient):
    """Generation client that records its prompts and returns a fixed answer."""

    model = "fake/answer-model"

    def __init__(self, answer: str = "The heart pumps blood.", fail: bool = False) -> None:
        self.answer = answer
        self.fail = fail
        self.calls: list[dict] = []

    def complete(self, messages: list[dict], temperature: float | None = None) -> str:
        self.calls.append({"messages": messages, "temperature": temperature})
        if self.fail:
            raise TimeoutError("generation backend timed out")
        return self.answer


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def embedding_client():
    return VocabularyEmbeddingClient()


@pytest.fixture
def embedder(embedding_client):
    return ClientEmbedder(embedding_client=embedding_client, batch_size=5, batch_delay=0)


@pytest.fixture
def llm_client():
    return FakeLLMClient()


@pytest.fixture
def cipher():
    return FieldCipher.from_secret("test-secret")


@pytest.fixture
def content_store():
    return InMemoryContentStore()


@pytest.fixture
def corpus_registry():
    return InMemoryCorpusRegistry()


@pytest.fixture
def codec(content_store, cipher):
    return SnapshotCodec(content_store, cipher)


@pytest.fixture
def vector_store(codec, corpus_registry):
    return VectorStore(codec, corpus_registry)


@pytest.fixture
def make_record():
    """Factory for vector records with sensible defaults."""

    def _make(
        vector: list[float],
        content: str = "some content",
        corpus_id: str = "corpus-a",
        source_file_name: str = "doc.txt",
        chunk_index: int = 0,
        total_chunks: int = 1,
    ) -> VectorRecord:
        chunk = Chunk(
            content=content,
            start_index=0,
            end_index=max(1, len(content)),
            source_file_name=source_file_name,
            chunk_index=chunk_index,
            total_chunks=total_chunks,
            corpus_id=corpus_id,
        )
        return VectorRecord(vector=vector, chunk=chunk)

    return _make


@pytest.fixture
def make_request():
    """Factory for ingestion requests carrying a text document."""

    def _make(
        text: str = MEDICAL_TEXT,
        corpus_id: str = "medicine",
        file_name: str = "notes.txt",
        media_type: str = "text/plain",
    ) -> IngestionRequest:
        document = Document(data=text.encode("utf-8"), media_type=media_type, file_name=file_name)
        return IngestionRequest(corpus_id=corpus_id, document=document)

    return _make


@pytest.fixture
def texts():
    """Sample documents on three unrelated topics."""
    return {"medicine": MEDICAL_TEXT, "programming": PROGRAMMING_TEXT, "weather": WEATHER_TEXT}


@pytest.fixture
def embed_text():
    """The deterministic embedding the fake client produces for a text."""
    return vocabulary_vector


@pytest.fixture
def ingestor(embedder, vector_store):
    """Ingestor wired to the fake embedder and in-memory stores."""
    from corpusvault.chunker import TextChunker
    from corpusvault.extractors import ExtractorRegistry
    from corpusvault.guard import RelevanceGuard
    from corpusvault.ingestor import Ingestor

    return Ingestor(
        extractor_registry=ExtractorRegistry.default(),
        chunker=TextChunker(),
        embedder=embedder,
        guard=RelevanceGuard(threshold=0.15),
        vector_store=vector_store,
    )


@dataclass(frozen=True)
class FakeProvider:
    """Provider configuration that hands out the fake clients."""

    embedding_client: VocabularyEmbeddingClient
    llm_client: FakeLLMClient

    def build_embedder(self, settings: Settings) -> ClientEmbedder:
        return ClientEmbedder(
            embedding_client=self.embedding_client,
            batch_size=settings.embedding_batch_size,
            batch_delay=settings.embedding_batch_delay,
        )

    def build_llm_client(self, settings: Settings) -> FakeLLMClient:
        return self.llm_client


@pytest.fixture
def fake_provider(embedding_client, llm_client):
    return FakeProvider(embedding_client=embedding_client, llm_client=llm_client)


@pytest.fixture
def fast_settings():
    """Settings without pauses so queued work finishes quickly."""
    return Settings(embedding_batch_delay=0, queue_next_job_delay=0, queue_poll_interval=0.05)


@pytest.fixture
def vault(fake_provider, fast_settings):
    """A CorpusVault over in-memory storage and the fake clients."""
    from corpusvault.configuration import InMemoryStorage
    from corpusvault.vault import CorpusVault

    return CorpusVault(
        provider=fake_provider,
        storage=InMemoryStorage(),
        secret="vault-secret",
        settings=fast_settings,
    )
