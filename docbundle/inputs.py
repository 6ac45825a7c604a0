"""Inbound generation request schema and validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping

from .errors import RequestValidationError
from .generation.constants import AUDIENCES, DEFAULT_AUDIENCE, DEFAULT_TONE_STYLE, TONE_STYLES
from .generation.generator import GenerationMode
from .site.colors import is_valid_hex

MAX_PROJECT_NAME_CHARS = 100
MAX_CODE_INPUT_CHARS = 50_000


@dataclass(frozen=True)
class GenerateRequest:
    """A validated request to build a documentation bundle."""

    project_name: str
    code_input: str
    accent_color: str
    include_sidebar: bool
    description: str = ""
    sources_input: str = ""
    repo_url: str = ""
    generate_full_docs: bool = False
    audience: str = DEFAULT_AUDIENCE
    tone_style: str = DEFAULT_TONE_STYLE

    @property
    def mode(self) -> GenerationMode:
        return GenerationMode.FULL_PACKAGE if self.generate_full_docs else GenerationMode.SINGLE_FILE

    @property
    def has_sources(self) -> bool:
        return bool(self.sources_input and self.sources_input.strip())

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "GenerateRequest":
        """Build a request from the camelCase wire payload or raise with every violation."""
        errors = validate_payload(payload)
        if errors:
            raise RequestValidationError(errors)
        return cls(
            project_name=payload["projectName"].strip(),
            code_input=payload["codeInput"],
            accent_color=payload["accentColor"],
            include_sidebar=payload["includeSidebar"],
            description=payload.get("description") or "",
            sources_input=payload.get("sourcesInput") or "",
            repo_url=payload.get("repoUrl") or "",
            generate_full_docs=bool(payload.get("generateFullDocs", False)),
            audience=payload.get("audience") or DEFAULT_AUDIENCE,
            tone_style=payload.get("toneStyle") or DEFAULT_TONE_STYLE,
        )


def validate_payload(payload: Mapping[str, Any]) -> List[str]:
    """Return all validation errors for ``payload``; an empty list means valid."""
    if not isinstance(payload, Mapping):
        return ["Request body must be a JSON object"]

    errors: List[str] = []

    project_name = payload.get("projectName")
    if not isinstance(project_name, str) or not project_name.strip():
        errors.append("Project name is required")
    elif len(project_name.strip()) > MAX_PROJECT_NAME_CHARS:
        errors.append(f"Project name must be at most {MAX_PROJECT_NAME_CHARS} characters")

    code_input = payload.get("codeInput")
    if not isinstance(code_input, str) or not code_input.strip():
        errors.append("Code input is required")
    elif len(code_input.strip()) > MAX_CODE_INPUT_CHARS:
        errors.append(f"Code input must be at most {MAX_CODE_INPUT_CHARS} characters")

    accent_color = payload.get("accentColor")
    if not isinstance(accent_color, str) or not is_valid_hex(accent_color):
        errors.append("Valid hex color code is required")

    if not isinstance(payload.get("includeSidebar"), bool):
        errors.append("includeSidebar must be a boolean")

    full_docs = payload.get("generateFullDocs")
    if full_docs is not None and not isinstance(full_docs, bool):
        errors.append("generateFullDocs must be a boolean")

    for key, label in (("description", "Description"), ("sourcesInput", "Sources"), ("repoUrl", "Repository URL")):
        value = payload.get(key)
        if value is not None and not isinstance(value, str):
            errors.append(f"{label} must be a string")

    audience = payload.get("audience")
    if audience and audience not in AUDIENCES:
        errors.append(f"Audience must be one of: {', '.join(AUDIENCES)}")

    tone_style = payload.get("toneStyle")
    if tone_style and tone_style not in TONE_STYLES:
        errors.append(f"Tone style must be one of: {', '.join(TONE_STYLES)}")

    return errors


__all__ = ["GenerateRequest", "validate_payload"]
