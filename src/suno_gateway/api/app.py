"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

import httpx
from fastapi import FastAPI, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from suno_gateway.api.models import CustomGenerateBody, ErrorBody, GenerateBody
from suno_gateway.app_logging import configure_logging
from suno_gateway.containers import AppContainer
from suno_gateway.domain.clips import Clip
from suno_gateway.domain.errors import GenerationSubmissionError, SunoError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.suno.init()
        except Exception:
            logger.exception("Failed to bootstrap Suno session")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(GenerationSubmissionError)
    async def submission_error(
        request: Request, exc: GenerationSubmissionError
    ) -> JSONResponse:
        logger.error("Error generating audio: %s", exc.body)
        if exc.is_payment_required:
            return _error_response(status.HTTP_402_PAYMENT_REQUIRED, exc.detail)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Internal server error: {exc.detail}",
        )

    @app.exception_handler(SunoError)
    async def suno_error(request: Request, exc: SunoError) -> JSONResponse:
        logger.error("Suno client error: %s", exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, f"Internal server error: {exc}"
        )

    @app.exception_handler(httpx.HTTPError)
    async def transport_error(request: Request, exc: httpx.HTTPError) -> JSONResponse:
        logger.error("Suno request failed: %s", exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Internal server error: {_transport_detail(exc)}",
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/api/generate")
    async def generate(body: GenerateBody, request: Request) -> list[dict[str, object]]:
        """Generate songs from a description."""
        state_container: AppContainer = request.app.state.container
        async with state_container.suno_lock:
            clips = await state_container.suno.generate(
                body.prompt,
                make_instrumental=body.make_instrumental,
                model=body.model,
                wait_audio=body.wait_audio,
            )
        return _serialize(clips)

    @app.post("/api/custom_generate")
    async def custom_generate(
        body: CustomGenerateBody, request: Request
    ) -> list[dict[str, object]]:
        """Generate songs from lyrics, style tags and a title."""
        state_container: AppContainer = request.app.state.container
        async with state_container.suno_lock:
            clips = await state_container.suno.custom_generate(
                body.prompt,
                tags=body.tags,
                title=body.title,
                make_instrumental=body.make_instrumental,
                model=body.model,
                wait_audio=body.wait_audio,
                negative_tags=body.negative_tags,
            )
        return _serialize(clips)

    @app.get("/api/get")
    async def get_clips(
        request: Request, ids: str = Query(min_length=1)
    ) -> list[dict[str, object]]:
        """Return clip status for a comma-separated list of ids."""
        state_container: AppContainer = request.app.state.container
        clip_ids = [clip_id.strip() for clip_id in ids.split(",") if clip_id.strip()]
        async with state_container.suno_lock:
            clips = await state_container.suno.get(clip_ids)
        return _serialize(clips)

    return app


def _serialize(clips: list[Clip]) -> list[dict[str, object]]:
    return [asdict(clip) for clip in clips]


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=ErrorBody(error=message).model_dump()
    )


def _transport_detail(exc: httpx.HTTPError) -> str:
    """Prefer the provider's response body over the exception text."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.text or str(exc)
    return str(exc) or type(exc).__name__
