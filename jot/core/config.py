from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

STORAGE_KEY_PATTERN = r"^[A-Za-z0-9_.-]+$"


class RuntimeConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="JOT_", case_sensitive=False)

    log_level: str = "info"
    log_format: str = "json"
    data_dir: Path | None = None
    storage_key: str = Field("todoTasks", pattern=STORAGE_KEY_PATTERN)
    notify_timeout: float = Field(3.0, gt=0)

    @field_validator("storage_key")
    @classmethod
    def _reject_relative_names(cls, value: str) -> str:
        if value in {".", ".."}:
            raise ValueError("storage key must name a file, not a directory")
        return value


@lru_cache
def get_runtime_config() -> RuntimeConfig:
    return RuntimeConfig()
