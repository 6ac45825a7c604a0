"""Error taxonomy for the documentation bundle pipeline."""

from __future__ import annotations

from typing import Iterable, List


class DocBundleError(RuntimeError):
    """Base class for fatal pipeline errors."""


class RequestValidationError(DocBundleError):
    """Raised when an inbound request fails validation; nothing has run yet."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__(", ".join(self.errors))


class FetchCancelled(DocBundleError):
    """Raised when source fetching is abandoned because the caller went away."""


class GenerationError(DocBundleError):
    """Raised when the content generator fails or breaks its result contract."""


class TemplateLoadError(DocBundleError):
    """Raised when the base template assets cannot be read (deployment problem)."""


class BundleValidationError(DocBundleError):
    """Raised when an assembled bundle violates its structural invariants."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__(", ".join(self.errors))


__all__ = [
    "BundleValidationError",
    "DocBundleError",
    "FetchCancelled",
    "GenerationError",
    "RequestValidationError",
    "TemplateLoadError",
]
