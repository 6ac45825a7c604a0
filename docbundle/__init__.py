"""Documentation bundle generator: sources, LLM content, docsify templates."""

from .bundle import assemble_bundle, validate_bundle
from .inputs import GenerateRequest
from .pipeline import DocumentationPipeline

__version__ = "1.0.0"

__all__ = [
    "DocumentationPipeline",
    "GenerateRequest",
    "__version__",
    "assemble_bundle",
    "validate_bundle",
]
