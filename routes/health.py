"""Readiness endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from dependencies import ConfigDep, get_readiness_gate
from domain import ModelReadinessGate
from response_models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/healthz", response_model=HealthResponse)
def healthz(
    config: ConfigDep,
    gate: Annotated[ModelReadinessGate, Depends(get_readiness_gate)],
):
    """Reports whether the whisper model has passed the startup check."""
    body = HealthResponse(
        status="ok" if gate.ready else "starting",
        model=config.whisper.model_name,
        model_ready=gate.ready,
    )
    if not gate.ready:
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
