"""Instantiates the docsify HTML shell and CSS theme for a bundle."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Dict, Pattern

from ..errors import TemplateLoadError
from ..logging import get_logger
from ..models import TemplateConfig, TemplateResult
from .colors import generate_color_variations

EDIT_MARKER = "docbundle:edit"
COLOR_TOKEN = "{colorcode}"
COLOR_LIGHT_TOKEN = "{colorcode-light}"
COLOR_DARK_TOKEN = "{colorcode-dark}"

WITH_SIDEBAR = "with-sidebar"
WITHOUT_SIDEBAR = "without-sidebar"

# docsify setting -> TemplateConfig attribute
HTML_PLACEHOLDERS: Dict[str, str] = {
    "name": "project_name",
    "repo": "repo_url",
    "themeColor": "theme_color",
}

_LOAD_SIDEBAR_PATTERN = re.compile(r"loadSidebar:\s*true,")
_NO_SIDEBAR_LINK_PATTERN = re.compile(
    r"\s*<link[^>]*href=\"/themes/no-sidebar\.css\"[^>]*>\s*", re.IGNORECASE
)


def _placeholder_pattern(key: str) -> Pattern[str]:
    return re.compile(
        rf"^(?P<indent>[ \t]*){re.escape(key)}:[ \t]*\"(?:[^\"\\\n]|\\.)*\",[ \t]*//[ \t]*{re.escape(EDIT_MARKER)}[ \t]*$",
        re.MULTILINE,
    )


_PLACEHOLDER_PATTERNS: Dict[str, Pattern[str]] = {
    key: _placeholder_pattern(key) for key in HTML_PLACEHOLDERS
}


class TemplateInstantiator:
    """Loads a template variant and applies the user's project settings."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("assets")
        self.logger = get_logger("site")

    def instantiate(self, config: TemplateConfig) -> TemplateResult:
        html, css = self.load_variant(config.include_sidebar)
        result = TemplateResult(
            html_content=self.render_html(html, config),
            css_content=self.render_css(css, config.theme_color),
        )
        self.logger.info(
            "Templates instantiated for %s (variant=%s, color=%s)",
            config.project_name,
            WITH_SIDEBAR if config.include_sidebar else WITHOUT_SIDEBAR,
            config.theme_color,
        )
        return result

    def load_variant(self, include_sidebar: bool) -> tuple[str, str]:
        """Read ``index.html`` and ``themes/docs.css`` for the chosen variant."""
        variant_dir = self.templates_dir / (WITH_SIDEBAR if include_sidebar else WITHOUT_SIDEBAR)
        themes_dir = variant_dir / "themes"
        try:
            html = (variant_dir / "index.html").read_text(encoding="utf-8")
            css = (themes_dir / "docs.css").read_text(encoding="utf-8")
            no_sidebar_css = themes_dir / "no-sidebar.css"
            if not include_sidebar and no_sidebar_css.is_file():
                css = f"{css}\n\n{no_sidebar_css.read_text(encoding='utf-8')}"
        except OSError as exc:
            raise TemplateLoadError(f"Failed to read template files from {variant_dir}: {exc}") from exc
        return html, css

    def render_html(self, html: str, config: TemplateConfig) -> str:
        processed = html
        for key, attribute in HTML_PLACEHOLDERS.items():
            value = _js_string(str(getattr(config, attribute)))
            replacement = f"{key}: {value}, // {EDIT_MARKER}"
            processed, count = _PLACEHOLDER_PATTERNS[key].subn(
                lambda match: match.group("indent") + replacement, processed, count=1
            )
            if not count:
                self.logger.warning("Template has no marked '%s' setting; left unchanged", key)

        if not config.include_sidebar:
            processed = _LOAD_SIDEBAR_PATTERN.sub("loadSidebar: false,", processed, count=1)
            processed = _NO_SIDEBAR_LINK_PATTERN.sub("\n", processed, count=1)
        return processed

    @staticmethod
    def render_css(css: str, theme_color: str) -> str:
        variations = generate_color_variations(theme_color)
        processed = css.replace(COLOR_LIGHT_TOKEN, variations.light)
        processed = processed.replace(COLOR_DARK_TOKEN, variations.dark)
        return processed.replace(COLOR_TOKEN, theme_color)


def instantiate_templates(config: TemplateConfig, *, templates_dir: Path | None = None) -> TemplateResult:
    return TemplateInstantiator(templates_dir).instantiate(config)


def _js_string(value: str) -> str:
    return json.dumps(value).replace("</", "<\\/")


__all__ = [
    "COLOR_TOKEN",
    "EDIT_MARKER",
    "HTML_PLACEHOLDERS",
    "TemplateInstantiator",
    "instantiate_templates",
]
