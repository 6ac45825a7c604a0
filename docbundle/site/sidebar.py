"""Navigation sidebar derived from the generated markdown files."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from ..config import DEFAULT_ATTRIBUTION_LABEL, DEFAULT_ATTRIBUTION_URL
from ..models import DocumentationFile

SIDEBAR_HEADING = "# Navigation"
README_NAME = "README.md"

# Punctuation in root collation order; all of it sorts before digits and letters.
_PUNCTUATION_ORDER = "_-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"
_PUNCTUATION_RANK: Dict[str, int] = {char: rank for rank, char in enumerate(_PUNCTUATION_ORDER)}


def sort_files(files: Iterable[DocumentationFile]) -> List[DocumentationFile]:
    """README.md first, the rest in locale order.

    Names compare case-insensitively with punctuation ahead of digits and
    letters (``API_REFERENCE.md`` before ``API.md``); exact case-insensitive
    ties put lowercase first.
    """
    return sorted(files, key=_sort_key)


def display_name(file_name: str) -> str:
    stem = file_name[:-3] if file_name.lower().endswith(".md") else file_name
    return stem.replace("_", " ")


def build_sidebar(
    files: Iterable[DocumentationFile],
    *,
    attribution: Tuple[str, str] = (DEFAULT_ATTRIBUTION_LABEL, DEFAULT_ATTRIBUTION_URL),
) -> str:
    """Render the ``_sidebar.md`` document for docsify."""
    lines = [SIDEBAR_HEADING, ""]
    for item in sort_files(files):
        lines.append(f"- [{display_name(item.name)}]({item.path})")
    label, url = attribution
    lines.extend(["", "---", "", f"- [{label}]({url})"])
    return "\n".join(lines) + "\n"


def _sort_key(item: DocumentationFile) -> tuple:
    name = item.name
    primary = tuple(_collation_weight(char) for char in name)
    tertiary = tuple(char.isupper() for char in name)
    return (0 if name == README_NAME else 1, primary, tertiary)


def _collation_weight(char: str) -> tuple[int, int | str]:
    if char.isspace():
        return (0, ord(char))
    if char in _PUNCTUATION_RANK:
        return (1, _PUNCTUATION_RANK[char])
    if char.isdigit():
        return (3, char)
    if char.isalpha():
        return (4, char.casefold())
    return (2, ord(char))


__all__ = ["build_sidebar", "display_name", "sort_files"]
