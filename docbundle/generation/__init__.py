"""Documentation content generation through an LLM."""

from .generator import ContentGenerator, GenerationMode, GenerationRequest, GenerationResult

__all__ = ["ContentGenerator", "GenerationMode", "GenerationRequest", "GenerationResult"]
