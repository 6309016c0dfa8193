"""Service configuration, read once from the environment at startup."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Immutable service settings loaded from environment variables and .env."""

    server_addr: str
    rules_folder: str

    keep_in_memory: bool = True
    evaluation_timeout: Optional[float] = 30.0
    workers: int = 1
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @field_validator("server_addr")
    @classmethod
    def server_addr_has_port(cls, v: str) -> str:
        host, sep, port = v.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError("server_addr must look like host:port")
        if not 0 < int(port) < 65536:
            raise ValueError(f"port {port} out of range")
        return v

    @field_validator("evaluation_timeout")
    @classmethod
    def non_positive_timeout_disables(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}")
        return level

    def bind(self) -> tuple[str, int]:
        """Split server_addr into (host, port)."""
        host, _, port = self.server_addr.rpartition(":")
        return host.strip("[]"), int(port)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
