# src/corpusvault/settings.py
"""Configuration management for corpusvault.

This module contains behavioral settings that apply regardless of which
embedding/generation provider or storage backend is used. Settings are
passed programmatically; the library itself does not read environment
variables. Applications that want env-based config use corpusvault.config,
which reads env vars and YAML and passes the values explicitly.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from corpusvault.extractors import DEFAULT_ALLOWED_MEDIA_TYPES, DEFAULT_MAX_UPLOAD_BYTES

# Embedding throughput presets for different deployment scenarios
# - "cloud": larger batches, short pause (hosted APIs)
# - "local": smaller batches, shorter pause (models on the same machine)
EMBEDDING_PRESETS: dict[str, dict[str, Any]] = {
    "cloud": {
        "embedding_batch_size": 5,
        "embedding_batch_delay": 0.1,
    },
    "local": {
        "embedding_batch_size": 3,
        "embedding_batch_delay": 0.05,
    },
}

# Model prefixes that indicate local models (used for auto-detection)
LOCAL_MODEL_PREFIXES = ("ollama/", "llama.cpp/", "local/")


def detect_embedding_preset(model: str) -> Literal["cloud", "local"]:
    """Auto-detect the appropriate embedding preset based on model name.

    Args:
        model: The model identifier (e.g., "ollama/nomic-embed-text", "gemini/text-embedding-004")

    Returns:
        "local" for local models, "cloud" for cloud APIs
    """
    if model.lower().startswith(LOCAL_MODEL_PREFIXES):
        return "local"
    return "cloud"


class Settings(BaseModel):
    """Behavioral settings for corpusvault.

    Example:
        settings = Settings(relevance_threshold=0.2, default_top_k=8)

        # Or pick embedding throughput from the model name
        settings = Settings.for_embedding_model("ollama/nomic-embed-text")
    """

    # Upload validation
    max_upload_bytes: int = Field(default=DEFAULT_MAX_UPLOAD_BYTES, gt=0)
    allowed_media_types: list[str] = Field(
        default_factory=lambda: sorted(DEFAULT_ALLOWED_MEDIA_TYPES)
    )

    # Chunking
    chunk_size: int = Field(default=1000, gt=0)
    chunk_overlap: int = Field(default=200, ge=0)
    sentence_search_ratio: float = Field(default=0.3, ge=0.0, le=1.0)

    # Embedding throughput
    embedding_batch_size: int = Field(default=5, ge=1)
    embedding_batch_delay: float = Field(default=0.1, ge=0.0)

    # Relevance guard
    relevance_threshold: float = 0.15
    relevance_sample_size: int = Field(default=10, ge=1)
    relevance_max_comparisons: int = Field(default=100, ge=1)
    on_guard_error: Literal["accept", "reject"] = "accept"  # accept = fail open

    # Retrieval
    default_top_k: int = Field(default=5, ge=1)
    default_min_similarity: float = Field(default=0.1, ge=0.0, le=1.0)
    chars_per_token: int = Field(default=4, ge=1)
    synthesis_prompt: str | None = None
    synthesis_temperature: float | None = 0.3

    # Ingestion queue
    queue_poll_interval: float = Field(default=5.0, gt=0)
    queue_next_job_delay: float = Field(default=0.1, ge=0.0)
    job_retention_hours: float = Field(default=24, gt=0)
    cleanup_interval: float = Field(default=3600, gt=0)

    # Retry configuration (LiteLLM handles exponential backoff for RateLimitError)
    num_retries: int = Field(default=3, ge=0)

    @classmethod
    def for_embedding_model(cls, model: str, **overrides: Any) -> Settings:
        """Create Settings with the embedding preset matching a model.

        Args:
            model: Embedding model identifier used for preset detection.
            **overrides: Additional settings to override preset defaults.

        Example:
            settings = Settings.for_embedding_model("ollama/nomic-embed-text")
            settings.embedding_batch_size  # 3
        """
        preset_settings: dict[str, Any] = EMBEDDING_PRESETS[detect_embedding_preset(model)].copy()
        preset_settings.update(overrides)
        return cls(**preset_settings)
