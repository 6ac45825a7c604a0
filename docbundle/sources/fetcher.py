"""Sequential retrieval of external sources into a bounded text context."""

from __future__ import annotations

import http.client
import threading
from typing import List, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config import (
    DEFAULT_MAX_SOURCE_CHARS,
    DEFAULT_MAX_TOTAL_CHARS,
    DEFAULT_SOURCE_TIMEOUT,
    DEFAULT_USER_AGENT,
    SourcesConfig,
)
from ..errors import FetchCancelled
from ..logging import get_logger
from ..models import FetchedSource, FetchFailure, SourceFetchResult
from .normalizer import normalize_source, parse_source_list

TRUNCATION_MARKER = "\n\n[Truncated]"
SOURCE_HEADER = "[External Source]"


class SourceUnavailable(RuntimeError):
    """A single source could not be retrieved; recorded, never propagated."""


def clamp_text(text: str, max_chars: int) -> str:
    """Cut ``text`` to ``max_chars`` and mark the cut."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + TRUNCATION_MARKER


class SourceFetcher:
    """Fetches user-supplied URLs in input order under per-source and total caps."""

    ACCEPT = "text/plain,text/markdown,text/*,*/*"

    def __init__(
        self,
        *,
        max_source_chars: int = DEFAULT_MAX_SOURCE_CHARS,
        max_total_chars: int = DEFAULT_MAX_TOTAL_CHARS,
        request_timeout: float = DEFAULT_SOURCE_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.max_source_chars = max_source_chars
        self.max_total_chars = max_total_chars
        self.request_timeout = request_timeout
        self.user_agent = user_agent
        self.logger = get_logger("sources")

    @classmethod
    def from_config(cls, config: SourcesConfig) -> "SourceFetcher":
        return cls(
            max_source_chars=config.max_source_chars,
            max_total_chars=config.max_total_chars,
            request_timeout=config.request_timeout,
            user_agent=config.user_agent,
        )

    def fetch_all(
        self,
        sources_input: str | None,
        *,
        cancel_event: threading.Event | None = None,
    ) -> SourceFetchResult:
        """Fetch every listed source until the aggregate budget is filled.

        Failed sources are recorded and skipped. Once a source fills the
        budget the remaining URLs are neither fetched nor reported. Raises
        :class:`FetchCancelled` when ``cancel_event`` is set mid-run.
        """
        sources = parse_source_list(sources_input)
        if not sources:
            return SourceFetchResult()

        fetched: List[FetchedSource] = []
        failed: List[FetchFailure] = []
        total = 0

        for raw_url in sources:
            self._check_cancelled(cancel_event)
            source = normalize_source(raw_url)
            if source.normalized_url != raw_url:
                self.logger.debug("Normalised %s -> %s", raw_url, source.normalized_url)
            try:
                text = self.fetch_text(source.normalized_url)
            except SourceUnavailable as exc:
                self.logger.warning("Skipping source %s: %s", raw_url, exc)
                failed.append(FetchFailure(raw_url=raw_url, error_message=str(exc)))
                continue
            self._check_cancelled(cancel_event)

            content = clamp_text(text, self.max_source_chars)
            remaining = self.max_total_chars - total
            if len(content) > remaining:
                content = content[:remaining]
            fetched.append(
                FetchedSource(
                    raw_url=raw_url,
                    normalized_url=source.normalized_url,
                    content=content,
                )
            )
            total += len(content)
            self.logger.debug("Fetched %s (%d chars, %d total)", raw_url, len(content), total)
            if total >= self.max_total_chars:
                self.logger.info(
                    "Source budget of %d chars reached at %s; ignoring remaining sources",
                    self.max_total_chars,
                    raw_url,
                )
                break

        return SourceFetchResult(
            fetched=fetched,
            failed=failed,
            combined_context=build_combined_context(fetched),
        )

    def fetch_text(self, url: str) -> str:
        """GET ``url`` and return its body as text, raising :class:`SourceUnavailable`."""
        headers = {"User-Agent": self.user_agent, "Accept": self.ACCEPT}
        try:
            request = Request(url, headers=headers, method="GET")
            with urlopen(request, timeout=self.request_timeout) as response:  # type: ignore[arg-type]
                status = getattr(response, "status", 200)
                if not 200 <= status < 300:
                    raise SourceUnavailable(f"HTTP {status} {getattr(response, 'reason', '')}".rstrip())
                raw = response.read()
                charset = _response_charset(response)
        except HTTPError as exc:
            raise SourceUnavailable(f"HTTP {exc.code} {exc.reason}") from exc
        except URLError as exc:
            if isinstance(exc.reason, TimeoutError):
                raise SourceUnavailable(self._timeout_message()) from exc
            raise SourceUnavailable(str(exc.reason)) from exc
        except TimeoutError as exc:
            raise SourceUnavailable(self._timeout_message()) from exc
        except ValueError as exc:
            raise SourceUnavailable(f"Invalid URL: {exc}") from exc
        except (OSError, http.client.HTTPException) as exc:
            raise SourceUnavailable(str(exc) or exc.__class__.__name__) from exc

        try:
            return raw.decode(charset, errors="replace")
        except LookupError:
            return raw.decode("utf-8", errors="replace")

    def _timeout_message(self) -> str:
        return f"Request timed out after {self.request_timeout:g}s"

    @staticmethod
    def _check_cancelled(cancel_event: threading.Event | None) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise FetchCancelled("Source fetching was cancelled")


def build_combined_context(fetched: List[FetchedSource]) -> str:
    """Concatenate fetched sources, each under a header naming its URL.

    Only the content counts toward ``max_total_chars``; headers and blank-line
    separators come on top, so the result may be longer than the cap.
    """
    blocks = [f"{SOURCE_HEADER} {item.raw_url}\n\n{item.content}" for item in fetched]
    return "\n\n".join(blocks)


def fetch_sources(
    sources_input: str | None,
    *,
    config: Optional[SourcesConfig] = None,
    cancel_event: threading.Event | None = None,
) -> SourceFetchResult:
    """Fetch sources with a one-off fetcher built from ``config`` (or defaults)."""
    fetcher = SourceFetcher.from_config(config) if config is not None else SourceFetcher()
    return fetcher.fetch_all(sources_input, cancel_event=cancel_event)


def _response_charset(response: object) -> str:
    headers = getattr(response, "headers", None)
    if headers is not None and hasattr(headers, "get_content_charset"):
        charset = headers.get_content_charset()
        if charset:
            return charset
    return "utf-8"


__all__ = [
    "SOURCE_HEADER",
    "TRUNCATION_MARKER",
    "SourceFetcher",
    "SourceUnavailable",
    "build_combined_context",
    "clamp_text",
    "fetch_sources",
]
