"""Content generator: prompts the LLM and enforces the files-mapping contract."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from ..errors import GenerationError
from ..logging import get_logger
from .constants import (
    AUDIENCE_GUIDANCE,
    AUDIENCE_LABELS,
    DEFAULT_AUDIENCE,
    DEFAULT_TONE_STYLE,
    PACKAGE_FILES,
    README_NAME,
    TONE_STYLE_DESCRIPTIONS,
    TONE_STYLE_LABELS,
)

_JSON_PATTERN = re.compile(r"\{[\s\S]*\}")
_FILE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_. -]*\.md$")


class GenerationMode(str, Enum):
    SINGLE_FILE = "single-file"
    FULL_PACKAGE = "full-package"


class PromptRunner(Protocol):
    def run(self, prompt: str, *, system: str | None = None, max_tokens: Optional[int] = None) -> str:
        ...


@dataclass(frozen=True)
class GenerationRequest:
    """Everything the generator needs to write documentation for one project."""

    project_name: str
    context: str
    audience: str = DEFAULT_AUDIENCE
    tone_style: str = DEFAULT_TONE_STYLE
    mode: GenerationMode = GenerationMode.SINGLE_FILE
    description: str = ""


@dataclass
class GenerationResult:
    files: Dict[str, str]
    analysis: Dict[str, Any] = field(default_factory=dict)


class ContentGenerator:
    """Turns project context into named markdown documents via an LLM runner."""

    SYSTEM_PROMPT = (
        "You are an expert technical documentation writer. Stay grounded in the supplied project "
        "information, never invent commands or APIs, and answer with JSON only."
    )
    ANALYSIS_MAX_TOKENS = 2048

    def __init__(self, runner: PromptRunner, *, templates_dir: Path | None = None) -> None:
        self.runner = runner
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.logger = get_logger("generation")

    def ensure_ready(self) -> None:
        ensure = getattr(self.runner, "ensure_ready", None)
        if callable(ensure):
            ensure()

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """Return the generated files; raises :class:`GenerationError` on any contract breach."""
        if request.mode is GenerationMode.FULL_PACKAGE:
            return self._generate_package(request)
        return self._generate_readme(request)

    def _generate_readme(self, request: GenerationRequest) -> GenerationResult:
        self.logger.info("Generating single-file README for %s", request.project_name)
        prompt = self._render("readme.j2", request, files=[README_NAME])
        result = self._parse_result(self._call(prompt))
        if README_NAME in result.files and len(result.files) > 1:
            dropped = sorted(name for name in result.files if name != README_NAME)
            self.logger.warning("Dropping extra files in single-file mode: %s", ", ".join(dropped))
            result.files = {README_NAME: result.files[README_NAME]}
        return result

    def _generate_package(self, request: GenerationRequest) -> GenerationResult:
        files = list(PACKAGE_FILES.get(request.audience, PACKAGE_FILES[DEFAULT_AUDIENCE]))
        self.logger.info("Analysing %s for a %d-file package", request.project_name, len(files))
        analysis_prompt = self._render("analysis.j2", request, files=files)
        analysis = self._call(analysis_prompt, max_tokens=self.ANALYSIS_MAX_TOKENS)

        self.logger.info("Generating documentation package for %s", request.project_name)
        package_prompt = self._render("package.j2", request, files=files, analysis=analysis)
        return self._parse_result(self._call(package_prompt))

    def _render(self, template_name: str, request: GenerationRequest, **extra: Any) -> str:
        try:
            template = self._env.get_template(template_name)
            return template.render(
                project_name=request.project_name,
                description=request.description,
                context=request.context,
                audience_label=AUDIENCE_LABELS.get(request.audience, request.audience),
                audience_guidance=AUDIENCE_GUIDANCE.get(request.audience, ""),
                tone_label=TONE_STYLE_LABELS.get(request.tone_style, request.tone_style),
                tone_description=TONE_STYLE_DESCRIPTIONS.get(request.tone_style, ""),
                **extra,
            )
        except TemplateError as exc:
            raise GenerationError(f"Failed to render prompt {template_name}: {exc}") from exc

    def _call(self, prompt: str, *, max_tokens: Optional[int] = None) -> str:
        try:
            if max_tokens is None:
                response = self.runner.run(prompt, system=self.SYSTEM_PROMPT)
            else:
                response = self.runner.run(prompt, system=self.SYSTEM_PROMPT, max_tokens=max_tokens)
        except RuntimeError as exc:
            raise GenerationError(str(exc)) from exc
        if not response or not response.strip():
            raise GenerationError("Unexpected empty response from the LLM")
        return response

    def _parse_result(self, response: str) -> GenerationResult:
        match = _JSON_PATTERN.search(response)
        if not match:
            self.logger.debug("LLM response without JSON: %s", response[:500])
            raise GenerationError("Failed to parse documentation: no JSON found in response")
        try:
            payload = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            self.logger.debug("LLM response with invalid JSON: %s", response[:500])
            raise GenerationError(f"Failed to parse documentation: {exc.msg}") from exc

        files = payload.get("files") if isinstance(payload, dict) else None
        if not isinstance(files, dict) or not files:
            raise GenerationError("Failed to parse documentation: response has no files")

        cleaned: Dict[str, str] = {}
        for name, content in files.items():
            if not isinstance(name, str) or not _FILE_NAME_PATTERN.match(name):
                raise GenerationError(f"Invalid documentation file name: {name!r}")
            if not isinstance(content, str):
                raise GenerationError(f"Documentation file {name} has non-text content")
            cleaned[name] = content

        analysis = payload.get("analysis")
        return GenerationResult(files=cleaned, analysis=analysis if isinstance(analysis, dict) else {})


__all__ = [
    "ContentGenerator",
    "GenerationMode",
    "GenerationRequest",
    "GenerationResult",
    "PromptRunner",
]
