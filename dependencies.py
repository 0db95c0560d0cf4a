"""FastAPI dependency injection configuration.

Components are built from the AppConfig stored on ``app.state`` by
``main.create_app``; nothing is read from the environment here.
"""

from typing import Annotated

from fastapi import Depends, Request

from config import AppConfig
from domain import FileLocks, InputValidator, ModelReadinessGate, TranscriptionPipeline
from infrastructure import (
    FfmpegResampler,
    ProcessRunner,
    ScriptModelProvisioner,
    WhisperCliRecognizer,
)
from infrastructure.interfaces import AudioResampler, SpeechRecognizer


def build_runner(config: AppConfig) -> ProcessRunner:
    """Returns a process runner bounded by the configured tool timeout."""
    return ProcessRunner(default_timeout=config.limits.tool_timeout_seconds)


def build_readiness_gate(config: AppConfig) -> ModelReadinessGate:
    """Returns the startup model gate backed by the download script."""
    provisioner = ScriptModelProvisioner(build_runner(config), config.whisper)
    return ModelReadinessGate(config.whisper, provisioner)


def get_config(request: Request) -> AppConfig:
    """Returns the application configuration."""
    return request.app.state.config


ConfigDep = Annotated[AppConfig, Depends(get_config)]


def get_file_locks(request: Request) -> FileLocks:
    """Returns the process-wide per-file lock registry."""
    return request.app.state.file_locks


def get_readiness_gate(request: Request) -> ModelReadinessGate:
    """Returns the model readiness gate."""
    return request.app.state.readiness_gate


def get_resampler(config: ConfigDep) -> AudioResampler:
    """Returns the configured audio resampler."""
    return FfmpegResampler(build_runner(config), config.resample)


def get_recognizer(config: ConfigDep) -> SpeechRecognizer:
    """Returns the configured speech recognizer."""
    return WhisperCliRecognizer(build_runner(config), config.whisper)


def get_validator(config: ConfigDep) -> InputValidator:
    """Returns the request validator."""
    return InputValidator(
        audio_dir=config.storage.audio_dir,
        required_extension=config.limits.source_extension,
        max_size_bytes=config.limits.max_file_size_bytes,
    )


def get_pipeline(
    config: ConfigDep,
    resampler: Annotated[AudioResampler, Depends(get_resampler)],
    recognizer: Annotated[SpeechRecognizer, Depends(get_recognizer)],
    file_locks: Annotated[FileLocks, Depends(get_file_locks)],
) -> TranscriptionPipeline:
    """Returns a fresh pipeline for one request."""
    return TranscriptionPipeline(
        resampler=resampler,
        recognizer=recognizer,
        audio_dir=config.storage.audio_dir,
        output_dir=config.storage.output_dir,
        file_locks=file_locks,
    )
