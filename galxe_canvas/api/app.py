"""FastAPI application wiring for the Galxe canvas service."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from pydantic_core import PydanticSerializationError

from .. import __version__
from ..core.config import Settings, get_settings
from ..core.exceptions import EncodingError
from ..core.logging import bind_correlation_id, clear_correlation_id, new_correlation_id
from ..core.models import CanvasResponse, SubmissionOutcome
from ..services.render_service import initial_components
from ..services.submission_service import SubmissionService

logger = structlog.get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def encode_envelope(envelope: CanvasResponse) -> bytes:
    """Serialize an envelope, omitting unset component fields."""
    try:
        return envelope.model_dump_json(exclude_none=True).encode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise EncodingError("Failed to marshal response", details={"error": str(exc)}) from exc


def canvas_response(
    envelope: CanvasResponse, status_code: int = 200, correlation_id: Optional[str] = None
) -> Response:
    headers = {CORRELATION_HEADER: correlation_id} if correlation_id else None
    return Response(
        content=encode_envelope(envelope),
        status_code=status_code,
        media_type="application/json",
        headers=headers,
    )


def build_app(
    settings: Optional[Settings] = None,
    service: Optional[SubmissionService] = None,
) -> FastAPI:
    """Create a configured FastAPI instance."""
    settings = settings or get_settings()
    service = service or SubmissionService(settings)

    app = FastAPI(title="Galxe Canvas Service", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(EncodingError)
    async def handle_encoding_error(request: Request, exc: EncodingError) -> PlainTextResponse:
        # Serialization itself failed; answer without a canvas.
        logger.error("Response encoding failed", path=request.url.path, error=exc.details.get("error"))
        return PlainTextResponse(exc.message, status_code=500)

    def run_submission(body: bytes, correlation_id: str) -> SubmissionOutcome:
        bind_correlation_id(correlation_id)
        try:
            return service.handle_payload(body)
        finally:
            clear_correlation_id()

    @app.get("/health")
    def health() -> dict:
        return {
            "status": "ok",
            "version": __version__,
            "endpoint": settings.graphql_endpoint,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.api_route("/init", methods=["GET", "POST"])
    def init_canvas() -> Response:
        logger.info("Initial canvas requested")
        return canvas_response(CanvasResponse.from_components(initial_components()))

    @app.post("/submit")
    async def submit(request: Request) -> Response:
        body = await request.body()
        correlation_id = request.headers.get(CORRELATION_HEADER) or new_correlation_id()

        outcome = await run_in_threadpool(run_submission, body, correlation_id)

        status_code = settings.submit_error_status if outcome.is_error else 200
        return canvas_response(outcome.envelope(), status_code, correlation_id)

    return app


app = build_app()
