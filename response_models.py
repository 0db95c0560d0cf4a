"""Response models for the transcription API."""

from pydantic import BaseModel


class TranscriptionResponse(BaseModel):
    """Transcript returned after a successful run."""

    text: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str


class HealthResponse(BaseModel):
    """Readiness report."""

    status: str
    model: str
    model_ready: bool
