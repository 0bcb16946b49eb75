"""Pydantic configuration models with YAML, .env and environment loading."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal, Mapping

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field

_DEFAULT_CONFIG_NAME = "svga11y.yaml"

# Keys looked up in a .env file, in priority order.
_ENV_FILE_KEYS: dict[str, tuple[str, ...]] = {
    "api_key": ("SVG_A11Y_API_KEY", "OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GOOGLE_API_KEY"),
    "endpoint": ("SVG_A11Y_ENDPOINT", "OPENAI_ENDPOINT"),
    "model": ("SVG_A11Y_MODEL",),
    "use_vision": ("SVG_A11Y_USE_VISION",),
}

# Keys looked up in the process environment.
_ENVIRON_KEYS: dict[str, tuple[str, ...]] = {
    "api_key": ("SVG_A11Y_API_KEY",),
    "endpoint": ("SVG_A11Y_ENDPOINT",),
    "model": ("SVG_A11Y_MODEL",),
    "use_vision": ("SVG_A11Y_USE_VISION",),
}


class ClientConfig(BaseModel):
    """Resolved settings for one pipeline.  Immutable once built."""

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    endpoint: str = ""
    model: str = ""
    use_vision: bool = False
    max_tokens: int = 500
    timeout: float = 60.0

    @property
    def has_credentials(self) -> bool:
        return bool(self.endpoint and self.api_key)

    def masked_key(self) -> str:
        if not self.api_key:
            return ""
        return self.api_key[:4] + "***" if len(self.api_key) > 8 else "***"


class AIConfig(BaseModel):
    """AI provider settings as written in the settings file.

    ``None`` means "not set here", so lower-priority sources can fill it.
    """

    endpoint: str | None = None
    api_key: str | None = None
    model: str | None = None
    use_vision: bool | None = None
    max_tokens: int = 500
    timeout: float = 60.0


class OutputConfig(BaseModel):
    """Output file settings."""

    suffix: str = "_accessible"
    report_format: Literal["json", "markdown"] = "markdown"


class AssistConfig(BaseModel):
    """Top-level configuration for svga11y."""

    ai: AIConfig = Field(default_factory=AIConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> AssistConfig:
        """Load config from a YAML file.

        Search order when *path* is None:
          1. ./svga11y.yaml
          2. ~/.config/svga11y/svga11y.yaml

        Returns default config if no file is found.
        """
        if path is not None:
            return cls._from_yaml(path)

        candidates = [
            Path.cwd() / _DEFAULT_CONFIG_NAME,
            Path.home() / ".config" / "svga11y" / _DEFAULT_CONFIG_NAME,
        ]
        for candidate in candidates:
            if candidate.is_file():
                return cls._from_yaml(candidate)

        return cls()

    @classmethod
    def _from_yaml(cls, path: Path) -> AssistConfig:
        raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return cls.model_validate(raw)


def _first(source: Mapping[str, str | None], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = source.get(key)
        if value:
            return value
    return None


def resolve_client_config(
    settings: AIConfig | None = None,
    *,
    env_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ClientConfig:
    """Merge settings file > .env file > process environment, key by key."""
    settings = settings or AIConfig()
    dotenv: Mapping[str, str | None] = {}
    if env_file is not None and env_file.is_file():
        dotenv = dotenv_values(env_file)
    environ = os.environ if environ is None else environ

    def pick(field_name: str) -> str | None:
        explicit = getattr(settings, field_name)
        if explicit not in (None, ""):
            return explicit
        return _first(dotenv, _ENV_FILE_KEYS[field_name]) or _first(environ, _ENVIRON_KEYS[field_name])

    if settings.use_vision is not None:
        use_vision = settings.use_vision
    else:
        raw_vision = _first(dotenv, _ENV_FILE_KEYS["use_vision"]) \
            or _first(environ, _ENVIRON_KEYS["use_vision"]) or ""
        use_vision = raw_vision.strip().lower() == "true"

    return ClientConfig(
        api_key=pick("api_key") or "",
        endpoint=pick("endpoint") or "",
        model=pick("model") or "",
        use_vision=use_vision,
        max_tokens=settings.max_tokens,
        timeout=settings.timeout,
    )
