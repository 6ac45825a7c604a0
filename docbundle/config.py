"""Configuration loading for docbundle (.docbundle.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".docbundle.yml"

DEFAULT_MAX_SOURCE_CHARS = 20_000
DEFAULT_MAX_TOTAL_CHARS = 60_000
DEFAULT_SOURCE_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "docbundle-source-fetcher"
DEFAULT_ATTRIBUTION_LABEL = "docsify"
DEFAULT_ATTRIBUTION_URL = "https://docsify.js.org/"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed or is incomplete."""


@dataclass
class LLMConfig:
    """LLM runtime settings from .docbundle.yml."""

    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    request_timeout: Optional[float] = None


@dataclass
class SourcesConfig:
    """Limits applied while fetching external sources."""

    max_source_chars: int = DEFAULT_MAX_SOURCE_CHARS
    max_total_chars: int = DEFAULT_MAX_TOTAL_CHARS
    request_timeout: float = DEFAULT_SOURCE_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class SiteConfig:
    """Template asset location and sidebar attribution."""

    templates_dir: Optional[Path] = None
    attribution_label: str = DEFAULT_ATTRIBUTION_LABEL
    attribution_url: str = DEFAULT_ATTRIBUTION_URL


@dataclass
class DocBundleConfig:
    """Represents the settings defined in .docbundle.yml."""

    root: Path
    llm: LLMConfig = field(default_factory=LLMConfig)
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    site: SiteConfig = field(default_factory=SiteConfig)


def load_config(config_path: Path) -> DocBundleConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocBundleConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    llm_data = _as_dict(data.get("llm"))
    llm = LLMConfig(
        model=_as_str(llm_data.get("model")),
        base_url=_as_str(llm_data.get("base_url")),
        api_key=_as_str(llm_data.get("api_key")),
        temperature=_as_float(llm_data.get("temperature")),
        max_tokens=_as_int(llm_data.get("max_tokens")),
        request_timeout=_as_float(llm_data.get("request_timeout")),
    )

    sources_data = _as_dict(data.get("sources"))
    sources = SourcesConfig()
    if sources_data:
        sources.max_source_chars = _positive_int(
            sources_data.get("max_source_chars"), "sources.max_source_chars", sources.max_source_chars
        )
        sources.max_total_chars = _positive_int(
            sources_data.get("max_total_chars"), "sources.max_total_chars", sources.max_total_chars
        )
        timeout = _as_float(sources_data.get("request_timeout"))
        if timeout is not None:
            if timeout <= 0:
                raise ConfigError("sources.request_timeout must be greater than zero")
            sources.request_timeout = timeout
        sources.user_agent = _as_str(sources_data.get("user_agent")) or sources.user_agent

    site_data = _as_dict(data.get("site"))
    site = SiteConfig()
    if site_data:
        templates_dir = _as_str(site_data.get("templates_dir"))
        site.templates_dir = root / templates_dir if templates_dir else None
        site.attribution_label = _as_str(site_data.get("attribution_label")) or site.attribution_label
        site.attribution_url = _as_str(site_data.get("attribution_url")) or site.attribution_url

    return DocBundleConfig(root=root, llm=llm, sources=sources, site=site)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _positive_int(value: Any, key: str, default: int) -> int:
    parsed = _as_int(value)
    if parsed is None:
        return default
    if parsed <= 0:
        raise ConfigError(f"{key} must be greater than zero")
    return parsed


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DocBundleConfig",
    "LLMConfig",
    "SiteConfig",
    "SourcesConfig",
    "load_config",
]
