"""Tests for source URL normalisation."""

from __future__ import annotations

import pytest

from docbundle.sources.normalizer import normalize_source, normalize_source_url, parse_source_list


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        (
            "https://docs.google.com/document/d/abc123/edit?usp=sharing",
            "https://docs.google.com/document/d/abc123/export?format=txt",
        ),
        (
            "https://github.com/owner/repo/blob/main/docs/README.md",
            "https://raw.githubusercontent.com/owner/repo/main/docs/README.md",
        ),
        (
            "https://codeberg.org/owner/repo/src/branch/main/README.md",
            "https://codeberg.org/owner/repo/raw/branch/main/README.md",
        ),
    ],
)
def test_normalize_rewrites_known_hosts(url: str, expected: str) -> None:
    assert normalize_source_url(url) == expected


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/docs/guide.md",
        "https://github.com/owner/repo",
        "https://docs.google.com/spreadsheets/d/abc/edit",
        "not a url",
        "",
        "http://[::1",
        "ftp//missing-colon",
    ],
)
def test_normalize_leaves_other_urls_unchanged(url: str) -> None:
    assert normalize_source_url(url) == url


@pytest.mark.parametrize(
    "url",
    [
        "https://docs.google.com/document/d/abc123/edit",
        "https://github.com/owner/repo/blob/main/README.md",
        "https://codeberg.org/owner/src/src/branch/main/README.md",
        "https://example.com/a",
        "http://[::1",
    ],
)
def test_normalize_is_idempotent(url: str) -> None:
    once = normalize_source_url(url)
    assert normalize_source_url(once) == once


def test_normalize_source_keeps_raw_url() -> None:
    source = normalize_source("https://github.com/o/r/blob/main/a.md")
    assert source.raw_url == "https://github.com/o/r/blob/main/a.md"
    assert source.normalized_url == "https://raw.githubusercontent.com/o/r/main/a.md"


def test_parse_source_list_splits_on_commas_and_newlines() -> None:
    text = " https://a.example/x ,\n\nhttps://b.example/y\n, ,https://c.example/z "
    assert parse_source_list(text) == [
        "https://a.example/x",
        "https://b.example/y",
        "https://c.example/z",
    ]


def test_parse_source_list_handles_empty_input() -> None:
    assert parse_source_list("") == []
    assert parse_source_list(None) == []
    assert parse_source_list(" ,\n ") == []
