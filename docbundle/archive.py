"""Writes a validated bundle as a ZIP archive."""

from __future__ import annotations

import io
import re
import zipfile
from datetime import date

from .bundle import ensure_valid
from .models import ExportBundle

INDEX_ENTRY = "index.html"
THEME_ENTRY = "themes/docs.css"
SIDEBAR_ENTRY = "_sidebar.md"


def build_archive(bundle: ExportBundle) -> bytes:
    """Return ZIP bytes laid out for docsify; invalid bundles are refused."""
    ensure_valid(bundle)
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(INDEX_ENTRY, bundle.index_html)
        archive.writestr(THEME_ENTRY, bundle.theme_css)
        archive.writestr(SIDEBAR_ENTRY, bundle.sidebar)
        for item in bundle.markdown_files:
            archive.writestr(item.name, item.content)
    return buffer.getvalue()


def sanitize_filename(name: str) -> str:
    cleaned = re.sub(r"[^a-z0-9]", "-", name, flags=re.IGNORECASE)
    cleaned = re.sub(r"-+", "-", cleaned)
    return cleaned.strip("-").lower()[:50]


def archive_filename(project_name: str, *, today: date | None = None) -> str:
    """``{project}-docs-{YYYY-MM-DD}.zip``"""
    stamp = (today or date.today()).isoformat()
    return f"{sanitize_filename(project_name) or 'project'}-docs-{stamp}.zip"


__all__ = ["archive_filename", "build_archive", "sanitize_filename"]
