"""Project configuration loaded from ``folio.yml``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from .storage import DEFAULT_SUFFIXES, FilesystemStore

CONFIG_FILENAME = "folio.yml"


class Config(BaseModel):
    project_name: str = Field(default="Folio Site")
    content_dir: Path = Field(default=Path("content"))
    collections: list[str] = Field(
        default_factory=lambda: ["posts", "projects"],
        description="Collection names; each is a directory below content_dir.",
    )
    suffixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SUFFIXES),
        description="File extensions recognized as content documents.",
    )
    strict_components: bool = Field(
        default=False,
        description="Fail rendering on unknown or malformed component markup.",
    )
    recent_limit: int = Field(
        default=4,
        ge=0,
        description="Number of documents shown in 'recent' listings.",
    )
    page_size: int = Field(default=10, ge=1, description="Documents per listing page.")

    @field_validator("content_dir", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("suffixes")
    def _normalize_suffixes(cls, value: list[str]) -> list[str]:
        normalized: list[str] = []
        for suffix in value:
            text = suffix.strip().lower()
            if not text:
                continue
            if not text.startswith("."):
                text = f".{text}"
            if text not in normalized:
                normalized.append(text)
        if not normalized:
            raise ValueError("at least one content suffix is required")
        return normalized

    def create_store(self) -> FilesystemStore:
        return FilesystemStore(self.content_dir, self.suffixes)


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    The ``path`` argument may point to a file (e.g., ``/site/folio.yml``) or a
    directory containing that file. A directory without a config file yields
    the defaults anchored at that directory.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    if candidate.is_dir():
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_yaml(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_yaml(candidate)
        base_dir = candidate.parent.resolve()

    cfg = Config(**data)
    if not cfg.content_dir.is_absolute():
        cfg.content_dir = (base_dir / cfg.content_dir).resolve()
    return cfg


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must define a mapping.")
    return data
