"""Application configuration loaded from config.yaml and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from elevate_cv.errors import ConfigError

API_KEY_ENV = "ANTHROPIC_API_KEY"
SEARCH_KEY_ENV = "TAVILY_API_KEY"


def _check_range(name: str, value: float, low: float, high: float | None = None) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    if value < low or (high is not None and value > high):
        bounds = f"{low}..{high}" if high is not None else f">= {low}"
        raise ConfigError(f"{name} must be {bounds}, got {value}")


@dataclass(frozen=True)
class LLMConfig:
    generate_model: str = "claude-haiku-4-5-20251001"
    gap_model: str = "claude-sonnet-4-5-20250929"
    refine_model: str = "claude-haiku-4-5-20251001"
    timeout: int = 120
    max_tokens: int = 4096
    temperature: float = 0.3

    def __post_init__(self):
        _check_range("timeout", self.timeout, 1, 600)
        _check_range("max_tokens", self.max_tokens, 256)
        _check_range("temperature", self.temperature, 0.0, 1.0)


@dataclass(frozen=True)
class SearchConfig:
    max_results: int = 5
    search_depth: str = "advanced"

    def __post_init__(self):
        _check_range("max_results", self.max_results, 1, 20)
        if self.search_depth not in ("basic", "advanced"):
            raise ConfigError(
                f"search_depth must be 'basic' or 'advanced', got {self.search_depth!r}"
            )


@dataclass(frozen=True)
class TaskConfig:
    min_courses_per_gap: int = 3
    max_input_chars: int = 20000
    max_upload_mb: int = 10

    def __post_init__(self):
        _check_range("min_courses_per_gap", self.min_courses_per_gap, 1, 10)
        _check_range("max_input_chars", self.max_input_chars, 1000)
        _check_range("max_upload_mb", self.max_upload_mb, 1, 50)


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    task: TaskConfig = field(default_factory=TaskConfig)


def _section(raw: dict, name: str) -> dict:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping, got {type(section).__name__}")
    return section


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

    try:
        return AppConfig(
            llm=LLMConfig(**_section(raw, "llm")),
            search=SearchConfig(**_section(raw, "search")),
            task=TaskConfig(**_section(raw, "task")),
        )
    except TypeError as e:
        raise ConfigError(f"Unknown configuration key: {e}") from e


def require_api_key() -> str:
    """Return the reasoning-service key or fail at startup."""
    key = os.environ.get(API_KEY_ENV, "").strip()
    if not key:
        raise ConfigError(
            f"{API_KEY_ENV} is not set. Export it or add it to a .env file."
        )
    return key


def optional_search_key() -> str | None:
    """Return the Tavily key if one is configured."""
    return os.environ.get(SEARCH_KEY_ENV, "").strip() or None
