# src/corpusvault/providers/litellm/models.py
"""Curated model constants for the LiteLLM provider.

These are convenience constants for IDE autocomplete. Any valid LiteLLM
model string works as well.

Example:
    from corpusvault.providers.litellm import ChatModels, LiteLLMClient

    llm_client = LiteLLMClient(model=ChatModels.OLLAMA_LLAMA_31_8B)
"""


class ChatModels:
    """Generation models for answer synthesis (via LiteLLMClient)."""

    # Local (Ollama)
    OLLAMA_LLAMA_31_8B = "ollama/llama3.1:8b"
    OLLAMA_LLAMA_32 = "ollama/llama3.2"
    OLLAMA_MISTRAL = "ollama/mistral"

    # Google Gemini
    GEMINI_15_FLASH = "gemini/gemini-1.5-flash"
    GEMINI_25_FLASH = "gemini/gemini-2.5-flash"

    # OpenAI
    GPT_5_MINI = "openai/gpt-5-mini"
    GPT_4O_MINI = "openai/gpt-4o-mini"

    # Anthropic
    CLAUDE_HAIKU_45 = "anthropic/claude-haiku-4-5-20251001"


class EmbeddingModels:
    """Embedding models for LiteLLMEmbeddingClient / ClientEmbedder."""

    # Local (Ollama)
    OLLAMA_NOMIC_EMBED = "ollama/nomic-embed-text"
    OLLAMA_MXBAI_EMBED = "ollama/mxbai-embed-large"

    # Google Gemini
    GEMINI_004 = "gemini/text-embedding-004"
    GEMINI_EMBEDDING_001 = "gemini/gemini-embedding-001"

    # OpenAI
    TEXT_3_SMALL = "openai/text-embedding-3-small"
    TEXT_3_LARGE = "openai/text-embedding-3-large"
