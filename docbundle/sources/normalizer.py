"""Rewrites human-facing document URLs into raw-text endpoints."""

from __future__ import annotations

import re
from typing import List, Optional
from urllib.parse import SplitResult, urlsplit

from ..models import NormalizedSource

_SPLIT_PATTERN = re.compile(r"[,\n]")
_GOOGLE_DOC_PATTERN = re.compile(r"/document/d/([^/]+)")


def parse_source_list(text: str | None) -> List[str]:
    """Split a comma/newline separated list of URLs, dropping blank entries."""
    if not text:
        return []
    return [entry.strip() for entry in _SPLIT_PATTERN.split(text) if entry.strip()]


def normalize_source_url(url: str) -> str:
    """Return the raw-text endpoint for ``url``; unknown or malformed URLs pass through."""
    try:
        parsed = urlsplit(url)
        host = parsed.hostname
    except ValueError:
        return url
    if not parsed.scheme or not host:
        return url

    for rule in (_google_doc_export, _github_raw, _codeberg_raw):
        rewritten = rule(host, parsed)
        if rewritten is not None:
            return rewritten
    return url


def normalize_source(raw_url: str) -> NormalizedSource:
    return NormalizedSource(raw_url=raw_url, normalized_url=normalize_source_url(raw_url))


def _google_doc_export(host: str, parsed: SplitResult) -> Optional[str]:
    if host != "docs.google.com":
        return None
    match = _GOOGLE_DOC_PATTERN.search(parsed.path)
    if not match:
        return None
    return f"https://docs.google.com/document/d/{match.group(1)}/export?format=txt"


def _github_raw(host: str, parsed: SplitResult) -> Optional[str]:
    if host != "github.com" or "/blob/" not in parsed.path:
        return None
    raw_path = parsed.path.replace("/blob/", "/", 1)
    return f"https://raw.githubusercontent.com{raw_path}"


def _codeberg_raw(host: str, parsed: SplitResult) -> Optional[str]:
    # Gitea layout: /{owner}/{repo}/src/{ref}/{path}
    if host != "codeberg.org":
        return None
    segments = parsed.path.split("/")
    if len(segments) < 5 or segments[3] != "src":
        return None
    segments[3] = "raw"
    return f"https://codeberg.org{'/'.join(segments)}"


__all__ = ["normalize_source", "normalize_source_url", "parse_source_list"]
