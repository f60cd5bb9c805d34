# src/corpusvault/config.py
"""Configuration loading utilities for corpusvault.

This module provides configuration loading that can be used by:
- CLI commands
- Services embedding corpusvault as a library

It handles:
- Finding and loading corpusvault.yaml config files
- Loading .env files for API keys and the encryption secret
- Building Settings objects from multiple sources
- Creating CorpusVault instances from configuration
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from corpusvault.configuration import StorageConfig
    from corpusvault.settings import Settings
    from corpusvault.vault import CorpusVault

# Default paths
DEFAULT_DATA_DIR = "./corpusvault_data"
CONFIG_FILES = ["corpusvault.yaml", "corpusvault.yml", ".corpusvault.yaml"]
ENV_FILE = ".env"
ENV_PREFIX = "CORPUSVAULT_"

STORAGE_BACKENDS = ("local", "ipfs", "memory")


@dataclass
class ConfigError:
    """Error during configuration loading."""

    message: str
    suggestion: str | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip("'\"")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in current directory or parent directories.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# Valid configuration keys for validation
VALID_ROOT_KEYS = {
    "llm_model",
    "embedding_model",
    "api_base",
    "secret",
    "storage",
    "data_dir",
    "ipfs_api_url",
    "settings",
}

VALID_SETTINGS_KEYS = {
    "max_upload_bytes",
    "allowed_media_types",
    "chunk_size",
    "chunk_overlap",
    "sentence_search_ratio",
    "embedding_batch_size",
    "embedding_batch_delay",
    "relevance_threshold",
    "relevance_sample_size",
    "relevance_max_comparisons",
    "on_guard_error",
    "default_top_k",
    "default_min_similarity",
    "chars_per_token",
    "synthesis_prompt",
    "synthesis_temperature",
    "queue_poll_interval",
    "queue_next_job_delay",
    "job_retention_hours",
    "cleanup_interval",
    "num_retries",
}


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - VALID_SETTINGS_KEYS
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    return config


def _safe_int(value: str | None) -> int | None:
    """Parse int from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _safe_float(value: str | None) -> float | None:
    """Parse float from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _parse_optional_str(value: str | None) -> str | None:
    """Treat an empty string as unset."""
    return value or None


def _parse_media_types(value: str | None) -> list[str] | None:
    if value is None:
        return None
    media_types = [part.strip() for part in value.split(",") if part.strip()]
    return media_types or None


def _parse_guard_policy(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    return normalized if normalized in {"accept", "reject"} else None


# Settings field -> parser for its CORPUSVAULT_<FIELD> environment variable
ENV_SETTINGS: dict[str, Callable[[str | None], Any]] = {
    "max_upload_bytes": _safe_int,
    "allowed_media_types": _parse_media_types,
    "chunk_size": _safe_int,
    "chunk_overlap": _safe_int,
    "sentence_search_ratio": _safe_float,
    "embedding_batch_size": _safe_int,
    "embedding_batch_delay": _safe_float,
    "relevance_threshold": _safe_float,
    "relevance_sample_size": _safe_int,
    "relevance_max_comparisons": _safe_int,
    "on_guard_error": _parse_guard_policy,
    "default_top_k": _safe_int,
    "default_min_similarity": _safe_float,
    "chars_per_token": _safe_int,
    "synthesis_temperature": _safe_float,
    "queue_poll_interval": _safe_float,
    "queue_next_job_delay": _safe_float,
    "job_retention_hours": _safe_float,
    "cleanup_interval": _safe_float,
    "num_retries": _safe_int,
}


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from CORPUSVAULT_* environment variables.

    Returns only values that are explicitly set and parse cleanly, so YAML
    settings apply unless overridden by env vars.

    Returns:
        Dictionary of setting name -> value for explicitly set env vars
    """
    result: dict[str, Any] = {}

    for field, parse in ENV_SETTINGS.items():
        if (val := parse(os.environ.get(f"{ENV_PREFIX}{field.upper()}"))) is not None:
            result[field] = val

    # The prompt may be cleared explicitly with an empty value
    if f"{ENV_PREFIX}SYNTHESIS_PROMPT" in os.environ:
        result["synthesis_prompt"] = _parse_optional_str(
            os.environ[f"{ENV_PREFIX}SYNTHESIS_PROMPT"]
        )

    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract settings from the 'settings:' section of a YAML config.

    Args:
        config: The loaded YAML configuration

    Returns:
        Dictionary of setting name -> value
    """
    yaml_settings = config.get("settings", {}) or {}
    return {key: value for key, value in yaml_settings.items() if key in VALID_SETTINGS_KEYS}


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
    embedding_model: str | None = None,
) -> Settings:
    """Build Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables (for CI/CD override)
    2. YAML settings: section
    3. Embedding preset for the embedding model (if given)
    4. Settings class defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)
        embedding_model: Embedding model used to pick a throughput preset

    Returns:
        Configured Settings instance
    """
    from corpusvault.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    # Merge: env vars override YAML, which overrides defaults
    merged = {**yaml_settings, **env_settings}

    if embedding_model:
        return Settings.for_embedding_model(embedding_model, **merged)
    return Settings(**merged)


@dataclass
class VaultConfig:
    """Configuration for creating a CorpusVault instance."""

    llm_model: str
    embedding_model: str
    secret: str
    settings: Settings
    storage: str = "local"
    data_dir: str = DEFAULT_DATA_DIR
    ipfs_api_url: str | None = None
    api_key: str | None = None
    api_base: str | None = None


def get_vault_config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> VaultConfig | ConfigError:
    """Get configuration for creating a CorpusVault instance.

    This extracts configuration without creating the instance, allowing
    the caller to handle errors and missing values appropriately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        VaultConfig with all settings, or ConfigError if invalid
    """
    config = load_config(config_path)

    def value(key: str) -> Any:
        return os.environ.get(f"{ENV_PREFIX}{key.upper()}") or config.get(key)

    llm_model = value("llm_model")
    embedding_model = value("embedding_model")
    if not llm_model or not embedding_model:
        return ConfigError(
            message="corpusvault requires llm_model and embedding_model.",
            suggestion=(
                "Set them in corpusvault.yaml or via CORPUSVAULT_LLM_MODEL "
                "and CORPUSVAULT_EMBEDDING_MODEL"
            ),
        )

    secret = value("secret")
    if not secret:
        return ConfigError(
            message="No encryption secret configured.",
            suggestion="Set CORPUSVAULT_SECRET (e.g. in .env) or 'secret' in corpusvault.yaml",
        )

    storage = str(value("storage") or "local").lower()
    if storage not in STORAGE_BACKENDS:
        return ConfigError(
            message=f"Unknown storage backend '{storage}'",
            suggestion=f"Supported storage backends: {', '.join(STORAGE_BACKENDS)}",
        )

    try:
        settings = build_settings(config, get_settings_from_env(), embedding_model)
    except ValueError as e:
        return ConfigError(message=f"Invalid settings: {e}")

    return VaultConfig(
        llm_model=llm_model,
        embedding_model=embedding_model,
        secret=str(secret),
        settings=settings,
        storage=storage,
        data_dir=data_dir or value("data_dir") or DEFAULT_DATA_DIR,
        ipfs_api_url=value("ipfs_api_url"),
        api_key=os.environ.get(f"{ENV_PREFIX}API_KEY"),
        api_base=value("api_base"),
    )


def build_storage(config: VaultConfig) -> StorageConfig:
    """Build the storage configuration named by a VaultConfig."""
    from corpusvault.configuration import InMemoryStorage, IPFSStorage, LocalStorage
    from corpusvault.stores.ipfs import DEFAULT_IPFS_API_URL

    if config.storage == "local":
        return LocalStorage(config.data_dir)
    if config.storage == "ipfs":
        return IPFSStorage(
            registry_path=os.path.join(config.data_dir, "corpora.db"),
            api_url=config.ipfs_api_url or DEFAULT_IPFS_API_URL,
        )
    if config.storage == "memory":
        return InMemoryStorage()
    raise ValueError(f"Unknown storage backend: {config.storage}")


def create_vault(config: VaultConfig) -> CorpusVault:
    """Create a CorpusVault instance from configuration.

    Args:
        config: Configuration for the vault

    Returns:
        Configured CorpusVault instance
    """
    from corpusvault.configuration import LiteLLMProvider
    from corpusvault.vault import CorpusVault

    return CorpusVault(
        provider=LiteLLMProvider(
            llm=config.llm_model,
            embedding=config.embedding_model,
            api_key=config.api_key,
            api_base=config.api_base,
        ),
        storage=build_storage(config),
        secret=config.secret,
        settings=config.settings,
    )


def get_vault(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> CorpusVault | ConfigError:
    """Create a CorpusVault instance based on configuration.

    This is a convenience function that combines get_vault_config and
    create_vault. For more control, use those functions separately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        Configured CorpusVault instance, or ConfigError if configuration is invalid
    """
    config = get_vault_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return config
    return create_vault(config)
