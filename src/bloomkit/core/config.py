"""
Configuration management for bloomkit.

Uses pydantic-settings for environment variable support, with an optional
YAML file overlay.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

ENV_PREFIX = "BLOOMKIT_"

VALID_ENVIRONMENTS = frozenset({"development", "staging", "production", "test"})
VALID_HASH_ENGINES = frozenset({"murmur3", "blake2b"})
VALID_BYTE_ORDERS = frozenset({"little", "big", "native"})
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    """bloomkit configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment Configuration
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production, test",
    )

    # Hashing
    hash_engine: str = Field(
        default="murmur3",
        description="128-bit hash engine used by new filters: murmur3 or blake2b",
    )
    hash_seed: int = Field(
        default=0,
        ge=0,
        le=0xFFFFFFFF,
        description="Seed passed to the murmur3 engine",
    )

    # Filter defaults (used by BloomFilter.from_settings)
    default_capacity_bits: int = Field(
        default=1 << 20,
        gt=0,
        description="Bit-vector length for filters built from settings",
    )
    default_expected_elements: int = Field(
        default=100_000,
        ge=0,
        description="Expected element count used to derive the hash count",
    )

    # Typed values
    byte_order: str = Field(
        default="little",
        description="Byte order for typed value encoding: little, big or native",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON-structured log lines",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        if v.lower() not in VALID_ENVIRONMENTS:
            raise ValueError(f"environment must be one of: {sorted(VALID_ENVIRONMENTS)}")
        return v.lower()

    @field_validator("hash_engine")
    @classmethod
    def validate_hash_engine(cls, v: str) -> str:
        """Validate hash engine name."""
        if v.lower() not in VALID_HASH_ENGINES:
            raise ValueError(f"hash_engine must be one of: {sorted(VALID_HASH_ENGINES)}")
        return v.lower()

    @field_validator("byte_order")
    @classmethod
    def validate_byte_order(cls, v: str) -> str:
        """Validate byte order."""
        if v.lower() not in VALID_BYTE_ORDERS:
            raise ValueError(f"byte_order must be one of: {sorted(VALID_BYTE_ORDERS)}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {sorted(VALID_LOG_LEVELS)}")
        return v.upper()


def _find_config_file() -> Path | None:
    """
    Find YAML config file in standard locations.

    Search order:
    1. BLOOMKIT_CONFIG_FILE environment variable
    2. ./bloomkit.yaml or ./bloomkit.yml (current directory)
    3. ~/.bloomkit/config.yaml (user home)

    Returns:
        Path to config file if found, None otherwise
    """
    env_config = os.getenv(f"{ENV_PREFIX}CONFIG_FILE")
    if env_config:
        path = Path(env_config).expanduser()
        if path.exists():
            return path
        logger.warning(f"Config file from {ENV_PREFIX}CONFIG_FILE not found: {path}")

    search_paths = [
        Path("bloomkit.yaml"),
        Path("bloomkit.yml"),
        Path.home() / ".bloomkit" / "config.yaml",
    ]
    for path in search_paths:
        if path.exists():
            return path

    return None


def _load_yaml_config(path: Path) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        path: Path to YAML config file

    Returns:
        Dictionary of configuration values

    Raises:
        ValueError: If YAML file is invalid
    """
    try:
        with open(path) as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file {path}: {e}") from e

    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a dictionary, got {type(config).__name__}")

    logger.debug(f"Loaded {len(config)} settings from {path}")
    return config


def load_settings_from_yaml(path: Path | None = None) -> Settings:
    """
    Build settings from a YAML file, letting environment variables win.

    Args:
        path: Explicit YAML path (searched for when None)

    Returns:
        Settings instance
    """
    if path is None:
        path = _find_config_file()

    yaml_config: dict[str, Any] = {}
    if path:
        yaml_config = _load_yaml_config(path)

    # Filter out YAML values that have env var overrides
    filtered_config = {}
    for key, value in yaml_config.items():
        env_key = f"{ENV_PREFIX}{key.upper()}"
        if os.getenv(env_key) is None:
            filtered_config[key] = value
        else:
            logger.debug(f"Skipping YAML key '{key}' - overridden by {env_key}")

    return Settings(**filtered_config)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Configuration priority (highest to lowest):
    1. Environment variables (BLOOMKIT_* prefix)
    2. YAML config file (if found)
    3. Default values

    Returns:
        Cached Settings instance
    """
    return load_settings_from_yaml()


def reset_settings() -> None:
    """Clear the cached settings, forcing reload on next get_settings() call."""
    get_settings.cache_clear()
