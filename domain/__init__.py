"""Domain layer containing business logic and models."""

from .file_locks import FileLocks
from .input_validator import InputValidator
from .model_readiness import ModelReadinessGate
from .models import (
    PipelineState,
    ProcessResult,
    TranscriptionRequest,
    TranscriptionResult,
)
from .transcription_pipeline import TranscriptionPipeline, temporary_file

__all__ = [
    "FileLocks",
    "InputValidator",
    "ModelReadinessGate",
    "PipelineState",
    "ProcessResult",
    "TranscriptionPipeline",
    "TranscriptionRequest",
    "TranscriptionResult",
    "temporary_file",
]
