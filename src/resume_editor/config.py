"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

PARSE_BACKENDS = ("http", "llm")


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class ParseConfig:
    backend: str = "http"  # "http" | "llm"
    endpoint: str = "http://localhost:3000/api/resume/parse-pdf"
    field_name: str = "resume"
    timeout: int = 60
    max_upload_mb: int = 5

    def __post_init__(self) -> None:
        if self.backend not in PARSE_BACKENDS:
            raise ValueError(f"parse.backend must be one of {PARSE_BACKENDS}, got {self.backend!r}")
        _check_range("parse.timeout", self.timeout, 1, 600)
        _check_range("parse.max_upload_mb", self.max_upload_mb, 1, 50)


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    timeout: int = 60
    max_retries: int = 0
    max_tokens: int = 4096

    def __post_init__(self) -> None:
        _check_range("llm.timeout", self.timeout, 1, 600)
        _check_range("llm.max_retries", self.max_retries, 0, 10)


@dataclass(frozen=True)
class PreviewConfig:
    separator: str = " | "
    experience_heading: str = "Work Experience"
    education_heading: str = "Education"
    skills_heading: str = "Skills"
    title: str = "Resume"

    @property
    def headings(self) -> dict[str, str]:
        return {
            "experience": self.experience_heading,
            "education": self.education_heading,
            "skills": self.skills_heading,
        }


@dataclass(frozen=True)
class EditorConfig:
    seed_blank_entries: bool = True


@dataclass(frozen=True)
class AppConfig:
    parse: ParseConfig = field(default_factory=ParseConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        parse=ParseConfig(**raw.get("parse", {})),
        llm=LLMConfig(**raw.get("llm", {})),
        preview=PreviewConfig(**raw.get("preview", {})),
        editor=EditorConfig(**raw.get("editor", {})),
    )
