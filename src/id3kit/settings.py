"""Runtime settings for id3kit, loaded from the environment or a ``.env`` file."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from id3kit.logging import LogFormat, LogLevel


class ID3Settings(BaseSettings):
    """Settings shared by tree construction, printing, and logging.

    Every field can be overridden with an ``ID3_``-prefixed environment
    variable, e.g. ``ID3_ROOT_LABEL=root`` or ``ID3_LOG_LEVEL=DEBUG``.

    Attributes:
        root_label (str): Label given to the root node of every built tree.
        print_indent (str): Indent repeated once per depth level when printing a tree.
        log_level (LogLevel): Default minimum level for `enable_logging`.
        log_format (LogFormat): Default format style for `enable_logging`.
    """

    model_config = SettingsConfigDict(
        env_prefix="ID3_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    root_label: str = Field(default="ROOT", min_length=1, description="Label given to the root node.")
    print_indent: str = Field(default="  ", description="Indent repeated once per depth level when printing.")
    log_level: LogLevel = Field(default="BUILD", description="Default minimum level for enable_logging.")
    log_format: LogFormat = Field(default="short", description="Default format style for enable_logging.")


@lru_cache(maxsize=1)
def get_settings() -> ID3Settings:
    """Return the process-wide settings, loading them on first use.

    Returns:
        ID3Settings: The cached settings instance. Call
            ``get_settings.cache_clear()`` to reload from the environment.
    """
    return ID3Settings()
