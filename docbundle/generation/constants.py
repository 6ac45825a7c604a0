"""Audience and tone vocabularies shared by validation and prompting."""

from __future__ import annotations

AUDIENCES: tuple[str, ...] = ("developer", "team", "enduser")
TONE_STYLES: tuple[str, ...] = ("casual", "professional", "friendly", "technical", "academic")

DEFAULT_AUDIENCE = "developer"
DEFAULT_TONE_STYLE = "professional"

AUDIENCE_LABELS: dict[str, str] = {
    "developer": "Developer (Technical)",
    "team": "Team Member",
    "enduser": "End User (Simple)",
}

AUDIENCE_GUIDANCE: dict[str, str] = {
    "developer": "Readers are engineers integrating or extending the code. Prefer precise APIs, commands and code samples.",
    "team": "Readers are colleagues joining the project. Explain architecture, workflows and conventions.",
    "enduser": "Readers are non-technical users. Avoid jargon, explain steps plainly and focus on outcomes.",
}

TONE_STYLE_LABELS: dict[str, str] = {
    "casual": "Casual",
    "professional": "Professional",
    "friendly": "Friendly",
    "technical": "Technical",
    "academic": "Academic",
}

TONE_STYLE_DESCRIPTIONS: dict[str, str] = {
    "casual": "Relaxed, informal tone with conversational language",
    "professional": "Formal, business-focused language",
    "friendly": "Warm, approachable tone that's easy to understand",
    "technical": "Precise, detailed language for technical accuracy",
    "academic": "Scholarly, structured tone with formal vocabulary",
}

# Topic files requested in full-package mode, README.md always first.
PACKAGE_FILES: dict[str, tuple[str, ...]] = {
    "developer": ("README.md", "SETUP.md", "API.md", "FEATURES.md", "TROUBLESHOOTING.md"),
    "team": ("README.md", "ONBOARDING.md", "ARCHITECTURE.md", "WORKFLOW.md", "FAQ.md"),
    "enduser": ("README.md", "GETTING_STARTED.md", "FEATURES.md", "FAQ.md", "TROUBLESHOOTING.md"),
}

README_NAME = "README.md"


__all__ = [
    "AUDIENCES",
    "AUDIENCE_GUIDANCE",
    "AUDIENCE_LABELS",
    "DEFAULT_AUDIENCE",
    "DEFAULT_TONE_STYLE",
    "PACKAGE_FILES",
    "README_NAME",
    "TONE_STYLES",
    "TONE_STYLE_DESCRIPTIONS",
    "TONE_STYLE_LABELS",
]
