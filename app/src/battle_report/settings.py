"""Application settings modeled via Pydantic."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from .report.enums import UnrecognizedPolicy


class Settings(BaseSettings):
    unrecognized_policy: UnrecognizedPolicy = Field(UnrecognizedPolicy.STRICT, alias="BATTLE_REPORT_POLICY")
    vocabulary_path: str | None = Field(None, alias="BATTLE_REPORT_VOCABULARY")
    max_report_bytes: int = Field(1024 * 1024, alias="BATTLE_REPORT_MAX_BYTES")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
