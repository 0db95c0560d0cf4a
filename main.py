"""
Whisper Transcription API.

Entry point for the transcription service. It handles:
- Checking (and downloading if needed) the whisper model before serving.
- Transcribing .ogg files from the audio directory via ffmpeg and whisper-cli.
- Structured JSON logging.
- Distributed tracing with Datadog.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from ddtrace import patch_all
from fastapi import FastAPI

from config import AppConfig, load_config
from dependencies import build_readiness_gate
from domain import FileLocks, ModelReadinessGate
from logging_config import setup_logging
from routes import health_router, transcribe_router

logger = logging.getLogger(__name__)


def create_app(
    config: AppConfig | None = None,
    readiness_gate: ModelReadinessGate | None = None,
) -> FastAPI:
    """Builds the FastAPI application around one immutable configuration."""
    config = config or load_config()
    readiness_gate = readiness_gate or build_readiness_gate(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if config.server.ensure_model_on_startup:
            await asyncio.to_thread(readiness_gate.ensure_ready)
        else:
            readiness_gate.ready = True
        config.storage.output_dir.mkdir(parents=True, exist_ok=True)
        logger.info(
            "Service initialized",
            extra={
                "model": config.whisper.model_name,
                "audio_dir": str(config.storage.audio_dir),
                "output_dir": str(config.storage.output_dir),
            },
        )
        yield

    app = FastAPI(title="Whisper Transcription API", lifespan=lifespan)
    app.state.config = config
    app.state.file_locks = FileLocks()
    app.state.readiness_gate = readiness_gate
    app.include_router(transcribe_router)
    app.include_router(health_router)
    return app


def main():
    """Starts the HTTP server."""
    config = load_config()
    setup_logging(config.server.log_level)
    patch_all()
    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
