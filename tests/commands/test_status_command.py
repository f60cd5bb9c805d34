# tests/commands/test_status_command.py
"""Tests for the status command."""

import pytest

from corpusvault.commands import status as status_cmd
from corpusvault.commands.status import status_with_vault
from corpusvault.models import Document


class TestStatusWithVault:
    @pytest.mark.asyncio
    async def test_empty_corpus(self, vault):
        result = await status_with_vault(vault, "medicine")

        assert result.success
        assert result.total_records == 0
        assert result.snapshot_cid is None
        assert result.snapshot_uuid is None

    @pytest.mark.asyncio
    async def test_populated_corpus(self, vault, texts):
        async with vault:
            vault.submit(
                "medicine",
                Document(data=texts["medicine"].encode(), media_type="text/plain", file_name="a.txt"),
            )
            await vault.join()

        result = await status_with_vault(vault, "medicine")

        assert result.total_records == 1
        assert result.files == ["a.txt"]
        assert result.vector_dimension == 13
        assert result.snapshot_cid == vault.corpus_registry.get_pointer("medicine")
        assert result.snapshot_uuid == "medicine"
        assert result.last_updated is not None

    @pytest.mark.asyncio
    async def test_unreadable_metadata_is_reported(self, vault):
        vault.corpus_registry.set_pointer("medicine", "f" * 64)

        result = await status_with_vault(vault, "medicine")

        assert result.success
        assert result.total_records == 0
        assert result.error.startswith("Snapshot metadata unavailable")


class TestStatusCommand:
    def test_config_error(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CORPUSVAULT_SECRET", raising=False)
        config = tmp_path / "corpusvault.yaml"
        config.write_text("llm_model: a/b\nembedding_model: c/d\n")

        result = status_cmd.status("medicine", config_path=config)

        assert not result.success
        assert "secret" in result.error
