"""Codec settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CodecSettings(BaseSettings):
    """Codec and sample harness settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="COINBIND_",
        case_sensitive=False,
        extra="ignore",
    )

    emit_other_fields: bool = Field(default=True)
    exact_round_trip: bool = Field(default=True)
    samples_dir: str | None = Field(default=None)

    def resolve_samples_dir(self) -> Path:
        if self.samples_dir:
            return Path(self.samples_dir).expanduser().resolve()
        return (Path.cwd() / "tests" / "resources" / "sample_response").resolve()


def load_settings(**overrides: object) -> CodecSettings:
    """Load settings from the environment, applying explicit overrides."""
    return CodecSettings(**overrides)
