"""Application settings loaded from YAML with environment variable overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

# ---------------------------------------------------------------------------
# Settings sections
# ---------------------------------------------------------------------------


class EmbeddingSettings(BaseModel):
    provider: str = "openai"
    model: str | None = None
    dimension: int | None = None
    batch_size: int = Field(default=64, ge=1)
    timeout: float = Field(default=30.0, gt=0)


class ChunkingSettings(BaseModel):
    strategy: str = "fixed"
    chunk_size: int = Field(default=1000, ge=1)
    chunk_overlap: int = Field(default=200, ge=0)


class IngestionSettings(BaseModel):
    max_file_size_bytes: int = MAX_UPLOAD_BYTES
    auto_import_dir: str | None = None


class RetrievalSettings(BaseModel):
    top_k: int = Field(default=5, ge=1)
    min_score: float = 0.0


class LLMSettings(BaseModel):
    provider: str | None = None
    model: str | None = None
    temperature: float = 0.3
    max_tokens: int = 2048


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    chunking: ChunkingSettings = Field(default_factory=ChunkingSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    log_level: str = "INFO"


def _find_settings_file() -> Path | None:
    """Walk up from cwd looking for settings.yaml."""
    profile = os.getenv("DOCSTORE_PROFILE", "")
    names = [f"settings-{profile}.yaml", "settings.yaml"] if profile else ["settings.yaml"]

    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        for name in names:
            candidate = parent / name
            if candidate.exists():
                return candidate
    return None


def _apply_env_overrides(settings: Settings) -> Settings:
    if level := os.getenv("DOCSTORE_LOG_LEVEL"):
        settings.log_level = level.upper()
    if provider := os.getenv("DOCSTORE_EMBEDDING_PROVIDER"):
        settings.embedding.provider = provider
    if provider := os.getenv("DOCSTORE_LLM_PROVIDER"):
        settings.llm.provider = provider
    return settings


def load_settings() -> Settings:
    """Load settings from YAML file, falling back to defaults."""
    path = _find_settings_file()
    if path is None:
        return _apply_env_overrides(Settings())

    with open(path, encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}

    return _apply_env_overrides(Settings(**raw))
