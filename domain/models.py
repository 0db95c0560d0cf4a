"""Domain models for the transcription service."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class TranscriptionRequest(BaseModel, frozen=True):
    """A validated request to transcribe one source audio file."""

    file_name: str
    source_path: Path
    size_bytes: int

    @property
    def stem(self) -> str:
        return Path(self.file_name).stem


class TranscriptionResult(BaseModel, frozen=True):
    """Result of a successful pipeline run."""

    file_name: str
    text: str
    result_path: Path


class ProcessResult(BaseModel, frozen=True):
    """Outcome of an external process that exited with status 0."""

    args: list[str]
    exit_code: int
    stdout: str = ""
    stderr: str = ""


class PipelineState(str, Enum):
    """Lifecycle of a single pipeline run."""

    VALIDATED = "validated"
    RESAMPLING = "resampling"
    TRANSCRIBING = "transcribing"
    CLEANUP = "cleanup"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
