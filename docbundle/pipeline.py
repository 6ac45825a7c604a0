"""End-to-end pipeline: sources -> generation -> templates -> bundle."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, List, Mapping

from .bundle import assemble_bundle, ensure_valid
from .config import DocBundleConfig, load_config
from .errors import FetchCancelled
from .generation import ContentGenerator, GenerationRequest
from .inputs import GenerateRequest
from .llm import LLMRunner
from .logging import get_logger
from .models import DocumentationFile, GenerationOutcome, SourceFetchResult, TemplateConfig
from .site import TemplateInstantiator
from .sources import SourceFetcher


class DocumentationPipeline:
    """Coordinates one documentation bundle build per call to :meth:`run`."""

    def __init__(
        self,
        config: DocBundleConfig | None = None,
        *,
        fetcher: SourceFetcher | None = None,
        generator: ContentGenerator | None = None,
        instantiator: TemplateInstantiator | None = None,
    ) -> None:
        self.config = config or DocBundleConfig(root=Path.cwd())
        self.fetcher = fetcher or SourceFetcher.from_config(self.config.sources)
        self.generator = generator or ContentGenerator(LLMRunner.from_config(self.config.llm))
        self.instantiator = instantiator or TemplateInstantiator(self.config.site.templates_dir)
        self.logger = get_logger("pipeline")

    @classmethod
    def from_config_path(cls, path: Path | str) -> "DocumentationPipeline":
        return cls(load_config(Path(path)))

    def run(
        self,
        request: GenerateRequest | Mapping[str, Any],
        *,
        cancel_event: threading.Event | None = None,
    ) -> GenerationOutcome:
        """Build and validate a bundle; any fatal error aborts the whole run."""
        if not isinstance(request, GenerateRequest):
            request = GenerateRequest.from_payload(request)
        self.generator.ensure_ready()
        self.logger.info("Generation request: %s", request.project_name)

        self.logger.info("Step 1: fetching external sources")
        sources = self.fetcher.fetch_all(request.sources_input, cancel_event=cancel_event)
        if sources.failed:
            self.logger.info("%d of %d sources failed", len(sources.failed), len(sources.fetched) + len(sources.failed))
        if cancel_event is not None and cancel_event.is_set():
            raise FetchCancelled("Generation was cancelled")

        self.logger.info(
            "Step 2: generating documentation (mode=%s, audience=%s, tone=%s)",
            request.mode.value,
            request.audience,
            request.tone_style,
        )
        generation = self.generator.generate(
            GenerationRequest(
                project_name=request.project_name,
                description=request.description,
                context=compose_context(request.code_input, sources),
                audience=request.audience,
                tone_style=request.tone_style,
                mode=request.mode,
            )
        )
        markdown_files: List[DocumentationFile] = [
            DocumentationFile(name=name, content=content) for name, content in generation.files.items()
        ]

        self.logger.info("Step 3: instantiating templates")
        templates = self.instantiator.instantiate(
            TemplateConfig(
                project_name=request.project_name,
                repo_url=request.repo_url,
                theme_color=request.accent_color,
                include_sidebar=request.include_sidebar,
            )
        )

        self.logger.info("Step 4: assembling bundle")
        bundle = assemble_bundle(
            templates.html_content,
            templates.css_content,
            markdown_files,
            include_sidebar=request.include_sidebar,
            attribution=(self.config.site.attribution_label, self.config.site.attribution_url),
        )
        ensure_valid(bundle)
        self.logger.info("Generation complete: %d documentation files", len(markdown_files))

        return GenerationOutcome(
            bundle=bundle,
            source_summary=sources.summary() if request.has_sources else None,
        )


def compose_context(code_input: str, sources: SourceFetchResult) -> str:
    """User code first, then the external source blocks."""
    if not sources.combined_context:
        return code_input
    return f"{code_input}\n\n{sources.combined_context}"


__all__ = ["DocumentationPipeline", "compose_context"]
