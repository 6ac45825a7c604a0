"""Tests for docbundle.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docbundle.config import ConfigError, DocBundleConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DocBundleConfig)
    assert config.root == tmp_path.resolve()
    assert config.llm.model is None
    assert config.llm.api_key is None
    assert config.sources.max_source_chars == 20_000
    assert config.sources.max_total_chars == 60_000
    assert config.sources.request_timeout == pytest.approx(10.0)
    assert config.site.templates_dir is None
    assert config.site.attribution_label == "docsify"


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".docbundle.yml"
    config_file.write_text(
        """
llm:
  model: "llama-3.1-8b-instant"
  base_url: "http://localhost:11434/v1"
  api_key: "test-key"
  temperature: 0.15
  max_tokens: 2048
  request_timeout: 60
sources:
  max_source_chars: 5000
  max_total_chars: 15000
  request_timeout: 4.5
  user_agent: "my-fetcher"
site:
  templates_dir: "templates"
  attribution_label: "Acme Docs"
  attribution_url: "https://docs.acme.example"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.llm.model == "llama-3.1-8b-instant"
    assert config.llm.base_url == "http://localhost:11434/v1"
    assert config.llm.api_key == "test-key"
    assert config.llm.temperature == pytest.approx(0.15)
    assert config.llm.max_tokens == 2048
    assert config.llm.request_timeout == pytest.approx(60.0)

    assert config.sources.max_source_chars == 5000
    assert config.sources.max_total_chars == 15000
    assert config.sources.request_timeout == pytest.approx(4.5)
    assert config.sources.user_agent == "my-fetcher"

    assert config.site.templates_dir == tmp_path.resolve() / "templates"
    assert config.site.attribution_label == "Acme Docs"
    assert config.site.attribution_url == "https://docs.acme.example"


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".docbundle.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).sources.max_total_chars == 60_000


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".docbundle.yml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".docbundle.yml").write_text("llm: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_positive_limits_are_rejected(tmp_path: Path) -> None:
    (tmp_path / ".docbundle.yml").write_text("sources:\n  max_total_chars: 0\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)
