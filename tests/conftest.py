from __future__ import annotations

import pytest

from tests._fixtures.http import UrlopenStub


@pytest.fixture
def urlopen_stub(monkeypatch) -> UrlopenStub:
    """Route all source fetching through an in-memory stub."""
    stub = UrlopenStub()
    monkeypatch.setattr("docbundle.sources.fetcher.urlopen", stub)
    return stub


@pytest.fixture(autouse=True)
def _isolate_llm_env(monkeypatch) -> None:
    for key in (
        "DOCBUNDLE_LLM_MODEL",
        "DOCBUNDLE_LLM_BASE_URL",
        "DOCBUNDLE_LLM_API_KEY",
        "GROQ_MODEL",
        "GROQ_API_KEY",
        "OPENAI_MODEL",
        "OPENAI_BASE_URL",
        "OPENAI_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)
