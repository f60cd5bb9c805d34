"""Provider configurations for corpusvault."""

from corpusvault.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
