"""Assembles and validates the export bundle."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from .config import DEFAULT_ATTRIBUTION_LABEL, DEFAULT_ATTRIBUTION_URL
from .errors import BundleValidationError
from .models import BundleValidation, DocumentationFile, ExportBundle
from .site.sidebar import README_NAME, build_sidebar


def assemble_bundle(
    html: str,
    css: str,
    markdown_files: Iterable[DocumentationFile],
    *,
    include_sidebar: bool = True,
    attribution: Tuple[str, str] = (DEFAULT_ATTRIBUTION_LABEL, DEFAULT_ATTRIBUTION_URL),
) -> ExportBundle:
    """Combine templates and documents into one bundle with a derived sidebar."""
    files = list(markdown_files)
    return ExportBundle(
        index_html=html,
        theme_css=css,
        markdown_files=files,
        sidebar=build_sidebar(files, attribution=attribution),
        include_sidebar=include_sidebar,
    )


def validate_bundle(bundle: ExportBundle) -> BundleValidation:
    """Check every structural rule and report all violations together."""
    errors: List[str] = []

    if not bundle.index_html or not bundle.index_html.strip():
        errors.append("HTML template is empty")

    if not bundle.theme_css or not bundle.theme_css.strip():
        errors.append("CSS theme is empty")

    if not bundle.markdown_files:
        errors.append("No markdown files in bundle")

    names = [item.name for item in bundle.markdown_files or []]
    if README_NAME not in names:
        errors.append(f"Missing {README_NAME}")

    return BundleValidation(valid=not errors, errors=errors)


def ensure_valid(bundle: ExportBundle) -> ExportBundle:
    """Return ``bundle`` unchanged or raise :class:`BundleValidationError`."""
    validation = validate_bundle(bundle)
    if not validation.valid:
        raise BundleValidationError(validation.errors)
    return bundle


def calculate_bundle_size(bundle: ExportBundle) -> int:
    """UTF-8 size of the HTML, CSS, sidebar and markdown contents."""
    total = len(bundle.index_html.encode("utf-8")) + len(bundle.theme_css.encode("utf-8"))
    total += len(bundle.sidebar.encode("utf-8"))
    total += sum(len(item.content.encode("utf-8")) for item in bundle.markdown_files)
    return total


def format_file_size(size: int) -> str:
    if size <= 0:
        return "0 Bytes"
    units = ("Bytes", "KB", "MB", "GB")
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


__all__ = [
    "assemble_bundle",
    "calculate_bundle_size",
    "ensure_valid",
    "format_file_size",
    "validate_bundle",
]
