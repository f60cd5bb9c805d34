# tests/test_settings.py
"""Tests for behavioral settings and embedding presets."""

import pydantic
import pytest

from corpusvault.extractors import DEFAULT_ALLOWED_MEDIA_TYPES
from corpusvault.settings import EMBEDDING_PRESETS, Settings, detect_embedding_preset


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.max_upload_bytes == 10 * 1024 * 1024
        assert settings.allowed_media_types == sorted(DEFAULT_ALLOWED_MEDIA_TYPES)
        assert settings.chunk_size == 1000
        assert settings.chunk_overlap == 200
        assert settings.sentence_search_ratio == 0.3
        assert settings.embedding_batch_size == 5
        assert settings.embedding_batch_delay == 0.1
        assert settings.relevance_threshold == 0.15
        assert settings.relevance_sample_size == 10
        assert settings.relevance_max_comparisons == 100
        assert settings.on_guard_error == "accept"
        assert settings.default_top_k == 5
        assert settings.default_min_similarity == 0.1
        assert settings.chars_per_token == 4
        assert settings.synthesis_prompt is None
        assert settings.queue_poll_interval == 5.0
        assert settings.job_retention_hours == 24
        assert settings.cleanup_interval == 3600

    def test_does_not_read_environment(self, monkeypatch):
        monkeypatch.setenv("CORPUSVAULT_CHUNK_SIZE", "50")
        assert Settings().chunk_size == 1000

    @pytest.mark.parametrize(
        "field,value",
        [
            ("chunk_size", 0),
            ("default_top_k", 0),
            ("default_min_similarity", 1.5),
            ("embedding_batch_size", 0),
            ("on_guard_error", "ignore"),
            ("max_upload_bytes", -1),
        ],
    )
    def test_rejects_invalid_values(self, field, value):
        with pytest.raises(pydantic.ValidationError):
            Settings(**{field: value})


class TestEmbeddingPresets:
    @pytest.mark.parametrize(
        "model,expected",
        [
            ("ollama/nomic-embed-text", "local"),
            ("Ollama/mxbai-embed-large", "local"),
            ("llama.cpp/bge", "local"),
            ("gemini/text-embedding-004", "cloud"),
            ("openai/text-embedding-3-small", "cloud"),
        ],
    )
    def test_detect(self, model, expected):
        assert detect_embedding_preset(model) == expected

    def test_local_preset(self):
        settings = Settings.for_embedding_model("ollama/nomic-embed-text")
        assert settings.embedding_batch_size == EMBEDDING_PRESETS["local"]["embedding_batch_size"]
        assert settings.embedding_batch_delay == EMBEDDING_PRESETS["local"]["embedding_batch_delay"]

    def test_cloud_preset(self):
        settings = Settings.for_embedding_model("gemini/text-embedding-004")
        assert settings.embedding_batch_size == 5

    def test_overrides_win(self):
        settings = Settings.for_embedding_model(
            "ollama/nomic-embed-text", embedding_batch_size=8, default_top_k=3
        )
        assert settings.embedding_batch_size == 8
        assert settings.default_top_k == 3
