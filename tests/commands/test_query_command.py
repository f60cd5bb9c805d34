# tests/commands/test_query_command.py
"""Tests for the query command."""

import pytest

from corpusvault.commands import query as query_cmd
from corpusvault.commands.query import query_with_vault
from corpusvault.models import Document
from corpusvault.query_service import INSUFFICIENT_INFORMATION_ANSWER


async def seed(vault, text: str) -> None:
    async with vault:
        vault.submit("medicine", Document(data=text.encode(), media_type="text/plain", file_name="notes.txt"))
        await vault.join()


class TestQueryWithVault:
    @pytest.mark.asyncio
    async def test_answer_and_sources(self, vault, texts, llm_client):
        await seed(vault, texts["medicine"])

        result = await query_with_vault(vault, "medicine", "What does the heart do?", "alice")

        assert result.success
        assert result.answer == llm_client.answer
        assert result.model_used == "fake/answer-model"
        assert result.sources[0].source_file_name == "notes.txt"
        assert result.sources[0].chunk_index == 0
        assert result.input_tokens > 0
        assert result.output_tokens > 0

    @pytest.mark.asyncio
    async def test_no_answer(self, vault):
        result = await query_with_vault(vault, "medicine", "What does the heart do?", "alice")

        assert result.success
        assert result.answer == INSUFFICIENT_INFORMATION_ANSWER
        assert result.sources == []

    @pytest.mark.asyncio
    async def test_errors_become_results(self, vault):
        result = await query_with_vault(vault, "medicine", "   ", "alice")

        assert not result.success
        assert result.error.startswith("Query failed")

    @pytest.mark.asyncio
    async def test_backend_failure(self, vault, texts, llm_client):
        await seed(vault, texts["medicine"])
        llm_client.fail = True

        result = await query_with_vault(vault, "medicine", "What does the heart do?", "alice")

        assert not result.success
        assert "Answer generation failed" in result.error


class TestQueryCommand:
    def test_config_error(self, tmp_path, monkeypatch):
        for key in ("CORPUSVAULT_LLM_MODEL", "CORPUSVAULT_EMBEDDING_MODEL"):
            monkeypatch.delenv(key, raising=False)

        config = tmp_path / "corpusvault.yaml"
        config.write_text("secret: s\n")

        result = query_cmd.query("medicine", "Why?", config_path=config)

        assert not result.success
        assert result.question == "Why?"

    def test_uses_configured_vault(self, vault, tmp_path, monkeypatch):
        config = tmp_path / "corpusvault.yaml"
        config.write_text("llm_model: a/b\nembedding_model: c/d\nsecret: s\n")
        monkeypatch.setattr(query_cmd, "create_vault", lambda config: vault)

        result = query_cmd.query("medicine", "What does the heart do?", config_path=config, top_k=2)

        assert result.success
        assert result.answer == INSUFFICIENT_INFORMATION_ANSWER
