"""Configuration system for TubeDigest.

Layered config loading (lowest to highest priority):
1. config/default.toml (shipped with package)
2. ~/.config/tdg/config.toml (user-level)
3. ./tdg.toml (project-level)
4. Environment variables (TDG_LLM__MODEL, etc.)
5. CLI flags
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_DEFAULT_CONFIG = _PACKAGE_ROOT / "config" / "default.toml"
_USER_CONFIG = Path.home() / ".config" / "tdg" / "config.toml"
_PROJECT_CONFIG = Path("tdg.toml")


class LLMConfig(BaseModel):
    model: str = "deepseek/deepseek-chat"
    api_base: str | None = None  # Custom endpoint (e.g. an OpenAI-compatible proxy)
    api_key: str | None = None  # None: LiteLLM reads the provider's env var
    temperature: float = 0.7
    max_tokens: int = 2000
    timeout: float = 30.0  # seconds, enforced by the transport


class CaptionsConfig(BaseModel):
    default_language: str = "en"
    preferred_languages: list[str] = ["en", "ar", "de"]
    fallback_languages: list[str] = [
        "en", "ar", "de", "fr", "es", "it", "pt", "ru", "ja", "ko", "zh", "hi", "tr",
    ]
    timeout: float = 20.0
    user_agent: str = (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.8"


class DetectionConfig(BaseModel):
    default_language: str = "en"
    targets: list[str] = ["ar", "de"]  # Checked in this order


class TDGConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TDG_",
        env_nested_delimiter="__",
    )

    llm: LLMConfig = LLMConfig()
    captions: CaptionsConfig = CaptionsConfig()
    detection: DetectionConfig = DetectionConfig()


def _load_toml(path: Path) -> dict:
    """Load a TOML file if it exists, return empty dict otherwise."""
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(**cli_overrides: object) -> TDGConfig:
    """Load configuration from all layers and merge.

    Args:
        **cli_overrides: Direct overrides from CLI flags. Keys can be
            dot-separated (e.g. llm.model="openai/gpt-4o-mini").
    """
    config_data: dict = {}
    for path in (_DEFAULT_CONFIG, _USER_CONFIG, _PROJECT_CONFIG):
        layer = _load_toml(path)
        config_data = _deep_merge(config_data, layer)

    for key, value in cli_overrides.items():
        if value is None:
            continue
        parts = key.split(".")
        target = config_data
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value

    # Env vars are handled by Pydantic BaseSettings
    return TDGConfig(**config_data)
