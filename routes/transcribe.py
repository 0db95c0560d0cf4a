"""Transcription endpoint."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from dependencies import ConfigDep, get_pipeline, get_validator
from domain import InputValidator, TranscriptionPipeline
from exceptions import (
    FileTooLargeError,
    InvalidFileNameError,
    MissingParameterError,
    ResampleFailedError,
    ResultMissingError,
    SourceFileNotFoundError,
    ToolTimeoutError,
    TranscribeFailedError,
    UnsupportedExtensionError,
)
from response_models import ErrorResponse, TranscriptionResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["transcription"])

ValidatorDep = Annotated[InputValidator, Depends(get_validator)]
PipelineDep = Annotated[TranscriptionPipeline, Depends(get_pipeline)]

INTERNAL_ERROR_MESSAGE = "Internal error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


async def _read_payload(request: Request) -> dict[str, Any]:
    """Returns the JSON object body, or an empty dict for anything else."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post(
    "/transcribe",
    response_model=TranscriptionResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
async def transcribe(
    request: Request,
    config: ConfigDep,
    validator: ValidatorDep,
    pipeline: PipelineDep,
):
    """
    Transcribes an .ogg file already present in the audio directory.

    Expects a JSON body ``{"file": "<name>.ogg"}``.
    """
    try:
        payload = await _read_payload(request)
        transcription_request = validator.validate(payload.get("file"))

        logger.info(
            "Transcription requested",
            extra={
                "file_name": transcription_request.file_name,
                "size_bytes": transcription_request.size_bytes,
            },
        )
        result = await pipeline.run(transcription_request)

    except MissingParameterError:
        return _error(400, 'Missing or invalid "file" parameter')
    except UnsupportedExtensionError:
        return _error(400, f'"file" must be an {config.limits.source_extension} file')
    except InvalidFileNameError as e:
        logger.warning("Rejected unsafe file name", extra={"file_name": e.file_name})
        return _error(400, 'Invalid "file" name')
    except SourceFileNotFoundError as e:
        return _error(404, str(e))
    except FileTooLargeError as e:
        return _error(413, str(e))
    except ResampleFailedError as e:
        logger.exception("Audio conversion failed", extra={"file_name": e.file_name})
        return _error(500, "Audio conversion failed")
    except TranscribeFailedError as e:
        logger.exception(
            "Whisper CLI failed",
            extra={"file_name": e.file_name, "exit_code": e.exit_code},
        )
        return _error(500, "Whisper CLI failed")
    except ResultMissingError as e:
        logger.exception(
            "Transcript result missing", extra={"result_path": str(e.result_path)}
        )
        return _error(500, INTERNAL_ERROR_MESSAGE)
    except ToolTimeoutError as e:
        logger.exception(
            "External tool timed out",
            extra={"program": e.program, "timeout_seconds": e.timeout_seconds},
        )
        return _error(504, "Transcription timed out")
    except Exception:
        logger.exception("Unexpected transcription error")
        return _error(500, INTERNAL_ERROR_MESSAGE)

    logger.info(
        "Transcription completed",
        extra={"file_name": result.file_name, "chars": len(result.text)},
    )
    return TranscriptionResponse(text=result.text)
