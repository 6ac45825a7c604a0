"""Core data models shared across docbundle components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class NormalizedSource:
    """A user-supplied URL paired with its fetchable raw-text endpoint."""

    raw_url: str
    normalized_url: str


@dataclass(frozen=True)
class FetchedSource:
    """Text retrieved for one external source, already clamped."""

    raw_url: str
    normalized_url: str
    content: str

    @property
    def chars(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class FetchFailure:
    """A source that could not be retrieved."""

    raw_url: str
    error_message: str


@dataclass
class SourceSummary:
    """User-facing report of which sources made it into the context."""

    fetched: List[Dict[str, Any]] = field(default_factory=list)
    failed: List[Dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"fetched": list(self.fetched), "failed": list(self.failed)}


@dataclass
class SourceFetchResult:
    """Aggregate of fetched and failed sources plus the bounded context string."""

    fetched: List[FetchedSource] = field(default_factory=list)
    failed: List[FetchFailure] = field(default_factory=list)
    combined_context: str = ""

    def summary(self) -> SourceSummary:
        return SourceSummary(
            fetched=[{"url": item.raw_url, "chars": item.chars} for item in self.fetched],
            failed=[{"url": item.raw_url, "error": item.error_message} for item in self.failed],
        )


@dataclass(frozen=True)
class DocumentationFile:
    """A generated markdown document."""

    name: str
    content: str

    @property
    def path(self) -> str:
        return f"/{self.name}"

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "content": self.content, "path": self.path}


@dataclass(frozen=True)
class TemplateConfig:
    """User settings applied to the HTML shell and CSS theme."""

    project_name: str
    repo_url: str
    theme_color: str
    include_sidebar: bool


@dataclass(frozen=True)
class TemplateResult:
    """Instantiated HTML shell and CSS theme."""

    html_content: str
    css_content: str


@dataclass(frozen=True)
class ColorVariations:
    primary: str
    light: str
    dark: str


@dataclass
class ExportBundle:
    """Everything that goes into the downloadable archive."""

    index_html: str
    theme_css: str
    markdown_files: List[DocumentationFile]
    sidebar: str = ""
    include_sidebar: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "indexHtml": self.index_html,
            "themeCss": self.theme_css,
            "sidebar": self.sidebar,
            "includeSidebar": self.include_sidebar,
            "markdownFiles": [item.to_dict() for item in self.markdown_files],
        }


@dataclass(frozen=True)
class BundleValidation:
    valid: bool
    errors: List[str]


@dataclass
class GenerationOutcome:
    """Result of a successful pipeline run."""

    bundle: ExportBundle
    source_summary: Optional[SourceSummary] = None
