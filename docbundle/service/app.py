"""FastAPI application exposing bundle generation over HTTP."""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable, Dict, List, Optional

from fastapi import Body, FastAPI
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from ..archive import archive_filename, build_archive
from ..config import ConfigError
from ..errors import (
    BundleValidationError,
    DocBundleError,
    FetchCancelled,
    GenerationError,
    RequestValidationError,
    TemplateLoadError,
)
from ..inputs import GenerateRequest
from ..logging import get_logger
from ..models import GenerationOutcome
from ..pipeline import DocumentationPipeline

logger = get_logger("service")


class HealthResponse(BaseModel):
    status: str


class DocumentationFileModel(BaseModel):
    name: str
    content: str
    path: str


class BundleModel(BaseModel):
    indexHtml: str
    themeCss: str
    sidebar: str
    includeSidebar: bool
    markdownFiles: List[DocumentationFileModel]


class SourceSummaryModel(BaseModel):
    fetched: List[Dict[str, Any]]
    failed: List[Dict[str, str]]


class GenerateData(BaseModel):
    bundle: BundleModel
    sourceSummary: Optional[SourceSummaryModel] = None


class GenerateResponse(BaseModel):
    success: bool
    data: Optional[GenerateData] = None
    error: Optional[str] = None


def _default_pipeline() -> DocumentationPipeline:
    return DocumentationPipeline.from_config_path(".")


def create_app(
    pipeline_factory: Callable[[], DocumentationPipeline] = _default_pipeline,
) -> FastAPI:
    """Create the FastAPI application exposing docbundle operations."""

    app = FastAPI(title="docbundle", version="1.0.0")

    async def _run(payload: Dict[str, Any]) -> GenerationOutcome:
        request = GenerateRequest.from_payload(payload)
        # Fresh pipeline per request; nothing is shared between runs.
        pipeline = pipeline_factory()
        cancel_event = threading.Event()
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(
                None, lambda: pipeline.run(request, cancel_event=cancel_event)
            )
        except asyncio.CancelledError:
            cancel_event.set()
            raise

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/api/generate", response_model=GenerateResponse)
    async def generate(payload: Dict[str, Any] = Body(...)) -> GenerateResponse:
        outcome = await _run(payload)
        summary = outcome.source_summary
        return GenerateResponse(
            success=True,
            data=GenerateData(
                bundle=BundleModel(**outcome.bundle.to_dict()),
                sourceSummary=SourceSummaryModel(**summary.to_dict()) if summary else None,
            ),
        )

    @app.post("/api/generate/archive")
    async def generate_archive(payload: Dict[str, Any] = Body(...)) -> Response:
        outcome = await _run(payload)
        filename = archive_filename(str(payload.get("projectName", "")))
        return Response(
            content=build_archive(outcome.bundle),
            media_type="application/zip",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_: Any, exc: RequestValidationError) -> JSONResponse:
        return _error_response(400, str(exc))

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        logger.error("Configuration error: %s", exc)
        return _error_response(500, f"Server configuration error: {exc}")

    @app.exception_handler(TemplateLoadError)
    async def template_error_handler(_: Any, exc: TemplateLoadError) -> JSONResponse:
        logger.error("Template assets unavailable: %s", exc)
        return _error_response(500, "Server configuration error: documentation templates are unavailable")

    @app.exception_handler(BundleValidationError)
    async def bundle_error_handler(_: Any, exc: BundleValidationError) -> JSONResponse:
        logger.error("Bundle validation failed: %s", exc)
        return _error_response(500, f"Bundle validation failed: {exc}")

    @app.exception_handler(GenerationError)
    async def generation_error_handler(_: Any, exc: GenerationError) -> JSONResponse:
        logger.error("Generation error: %s", exc)
        return _error_response(500, f"Generation failed: {exc}")

    @app.exception_handler(FetchCancelled)
    async def cancelled_handler(_: Any, exc: FetchCancelled) -> JSONResponse:
        return _error_response(499, str(exc))

    @app.exception_handler(DocBundleError)
    async def docbundle_error_handler(_: Any, exc: DocBundleError) -> JSONResponse:
        logger.error("Generation error: %s", exc)
        return _error_response(500, f"Generation failed: {exc}")

    @app.exception_handler(Exception)
    async def unexpected_error_handler(_: Any, exc: Exception) -> JSONResponse:
        logger.error("Unexpected error during generation: %s", exc, exc_info=exc)
        return _error_response(500, "Generation failed: unexpected server error")

    return app


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=GenerateResponse(success=False, error=message).model_dump(),
    )


def run_service(host: str = "0.0.0.0", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    # Logging is configured by the CLI; keep uvicorn from installing its own handlers.
    uvicorn.run(create_app(), host=host, port=port, log_config=None)
