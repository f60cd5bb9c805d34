# src/corpusvault/query_service.py
"""Question answering over a single corpus."""

from __future__ import annotations

import math
import time
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

from loguru import logger
from pydantic import BaseModel, Field

from corpusvault.embedder import Embedder
from corpusvault.exceptions import BackendUnavailableError, ValidationError
from corpusvault.models import (
    QueryMetadata,
    QueryResult,
    SearchResult,
    SourceReference,
    TokenUsage,
)
from corpusvault.providers import LLMClient
from corpusvault.stores import VectorStore

INSUFFICIENT_INFORMATION_ANSWER = (
    "I don't have enough relevant information in the knowledge base to answer "
    "your question. Please try rephrasing your question or ensure that relevant "
    "documents have been uploaded to this corpus."
)

SYSTEM_PROMPT = """You are a helpful assistant that answers questions based on the provided context from uploaded documents.

INSTRUCTIONS:
- Use ONLY the information provided in the context below to answer questions
- If the context doesn't contain enough information to answer the question, say so clearly
- Be concise but comprehensive in your answers
- Reference specific sources when possible
- Don't make up information that's not in the context

CONTEXT:
{context}"""

USER_PROMPT = "Question: {question}\n\nPlease answer based on the context provided above."

CONTEXT_SEPARATOR = "\n\n---\n\n"


class UsageEvent(BaseModel):
    """One answered query, as reported to a usage recorder."""

    corpus_id: str
    caller: str
    input_tokens: int
    output_tokens: int
    model_used: str
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


@runtime_checkable
class UsageRecorder(Protocol):
    """Receives usage events for pricing and payment accounting."""

    async def record_usage(self, event: UsageEvent) -> None: ...


def estimate_tokens(text: str, chars_per_token: int = 4) -> int:
    """Estimate a token count deterministically from text length."""
    return math.ceil(len(text) / chars_per_token)


class QueryService:
    """Answers questions from the records of one corpus.

    Steps: embed the question, search the corpus, then either return a fixed
    insufficient-information answer (no matches) or ask the generation
    backend to answer strictly from the retrieved context.
    """

    def __init__(
        self,
        embedder: Embedder,
        vector_store: VectorStore,
        llm_client: LLMClient,
        default_top_k: int = 5,
        default_min_similarity: float = 0.1,
        chars_per_token: int = 4,
        synthesis_temperature: float | None = 0.3,
        system_prompt: str | None = None,
        usage_recorder: UsageRecorder | None = None,
    ) -> None:
        """Initialize the query service.

        Args:
            embedder: Embedder for question embedding
            vector_store: Store holding the corpora
            llm_client: Generation backend for answer synthesis
            default_top_k: Number of chunks retrieved when not overridden
            default_min_similarity: Similarity floor when not overridden
            chars_per_token: Characters per token for usage estimates
            synthesis_temperature: Temperature for synthesis calls
            system_prompt: Custom system prompt template with a {context} field
            usage_recorder: Optional sink for usage events
        """
        if chars_per_token < 1:
            raise ValueError(f"chars_per_token must be at least 1, got {chars_per_token}")
        self.embedder = embedder
        self.vector_store = vector_store
        self._llm_client = llm_client
        self.default_top_k = default_top_k
        self.default_min_similarity = default_min_similarity
        self.chars_per_token = chars_per_token
        self.synthesis_temperature = synthesis_temperature
        self.system_prompt = system_prompt or SYSTEM_PROMPT
        self.usage_recorder = usage_recorder

    @property
    def model_used(self) -> str:
        return str(getattr(self._llm_client, "model", type(self._llm_client).__name__))

    async def aquery(
        self,
        question: str,
        corpus_id: str,
        caller: str,
        top_k: int | None = None,
        min_similarity: float | None = None,
    ) -> QueryResult:
        """Answer a question from a corpus.

        Args:
            question: The question to answer
            corpus_id: Corpus to search
            caller: Identity the usage is accounted to
            top_k: Number of chunks to retrieve (default: self.default_top_k)
            min_similarity: Similarity floor (default: self.default_min_similarity)

        Raises:
            ValidationError: If the question, corpus id, caller or overrides are invalid
            BackendUnavailableError: If embedding or generation fails
        """
        started = time.perf_counter()
        top_k = self.default_top_k if top_k is None else top_k
        min_similarity = self.default_min_similarity if min_similarity is None else min_similarity
        self._validate(question, corpus_id, caller, top_k, min_similarity)
        question = question.strip()

        query_vector = await self.embedder.aembed_text(question)
        results = await self.vector_store.search(
            corpus_id, query_vector, top_k=top_k, min_similarity=min_similarity
        )

        if results:
            answer = await self._synthesize_answer(question, results)
        else:
            logger.info(f"No relevant records in corpus {corpus_id} for query")
            answer = INSUFFICIENT_INFORMATION_ANSWER

        usage = TokenUsage(
            input_tokens=estimate_tokens(question, self.chars_per_token),
            output_tokens=estimate_tokens(answer, self.chars_per_token),
        )
        await self._record_usage(corpus_id, caller, usage)

        return QueryResult(
            answer=answer,
            metadata=QueryMetadata(
                corpus_id=corpus_id,
                total_sources_found=len(results),
                processing_time_ms=int((time.perf_counter() - started) * 1000),
                model_used=self.model_used,
                token_usage=usage,
            ),
            sources=[
                SourceReference(
                    chunk_id=r.record.chunk.id,
                    source_file_name=r.record.chunk.source_file_name,
                    chunk_index=r.record.chunk.chunk_index,
                    similarity=r.similarity,
                    content=r.record.chunk.content,
                )
                for r in results
            ],
        )

    async def ais_ready(self) -> bool:
        """Report whether both the embedding and generation backends are available."""
        return self.embedder.is_available() and self._llm_client.is_available()

    def build_context(self, results: list[SearchResult]) -> str:
        """Concatenate retrieved chunks, each tagged with its source and score."""
        return CONTEXT_SEPARATOR.join(
            f"Source {i} (from {r.record.chunk.source_file_name}, "
            f"similarity: {r.similarity:.3f}):\n{r.record.chunk.content}"
            for i, r in enumerate(results, 1)
        )

    async def _synthesize_answer(self, question: str, results: list[SearchResult]) -> str:
        system_prompt = self.system_prompt.format(context=self.build_context(results))
        prompt = USER_PROMPT.format(question=question)
        try:
            answer = await self._llm_client.agenerate(
                prompt,
                system_prompt=system_prompt,
                temperature=self.synthesis_temperature,
            )
        except Exception as e:
            raise BackendUnavailableError(f"Answer generation failed: {e}") from e
        return answer.strip()

    async def _record_usage(self, corpus_id: str, caller: str, usage: TokenUsage) -> None:
        if self.usage_recorder is None:
            return
        event = UsageEvent(
            corpus_id=corpus_id,
            caller=caller,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            model_used=self.model_used,
        )
        try:
            await self.usage_recorder.record_usage(event)
        except Exception as e:
            logger.warning(f"Failed to record usage for {caller} on corpus {corpus_id}: {e}")

    @staticmethod
    def _validate(
        question: str,
        corpus_id: str,
        caller: str,
        top_k: int,
        min_similarity: float,
    ) -> None:
        if not question.strip():
            raise ValidationError("Question must not be empty")
        if not corpus_id.strip():
            raise ValidationError("Corpus id must not be empty")
        if not caller.strip():
            raise ValidationError("Caller identity must not be empty")
        if top_k < 1:
            raise ValidationError(f"top_k must be at least 1, got {top_k}")
        if not 0.0 <= min_similarity <= 1.0:
            raise ValidationError(f"min_similarity must be between 0 and 1, got {min_similarity}")
