"""Helpers for building pipelines with offline collaborators."""

from __future__ import annotations

from pathlib import Path

from docbundle.config import DocBundleConfig
from docbundle.generation import ContentGenerator
from docbundle.pipeline import DocumentationPipeline

from .llm import RecordingLLMRunner


def make_pipeline(runner: RecordingLLMRunner, root: Path | None = None) -> DocumentationPipeline:
    config = DocBundleConfig(root=root or Path.cwd())
    return DocumentationPipeline(config, generator=ContentGenerator(runner))


def base_payload(**overrides):
    payload = {
        "projectName": "Foo",
        "codeInput": "function foo(){}",
        "accentColor": "#112233",
        "includeSidebar": True,
        "generateFullDocs": False,
    }
    payload.update(overrides)
    return payload
