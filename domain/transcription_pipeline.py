"""Core business logic: resample, transcribe, clean up, read result."""

import asyncio
import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from config import RESAMPLED_EXTENSION, RESULT_EXTENSION
from exceptions import (
    ExternalToolError,
    ResampleFailedError,
    ResultMissingError,
    TranscribeFailedError,
)
from infrastructure.interfaces import AudioResampler, SpeechRecognizer

from .file_locks import FileLocks
from .models import PipelineState, TranscriptionRequest, TranscriptionResult

logger = logging.getLogger(__name__)


@contextmanager
def temporary_file(path: Path) -> Iterator[Path]:
    """Yields ``path`` and removes whatever exists there on exit.

    Removal failures are logged and never replace the block's own outcome.
    """
    try:
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
            logger.info("Deleted temp file", extra={"path": str(path)})
        except OSError as e:
            logger.warning(
                "Could not delete temp file",
                extra={"path": str(path), "error": str(e)},
            )


class TranscriptionPipeline:
    """Runs one validated request through the external tools.

    One instance per request. ``state`` moves through
    validated -> resampling -> transcribing -> cleanup -> succeeded/failed.
    """

    def __init__(
        self,
        resampler: AudioResampler,
        recognizer: SpeechRecognizer,
        audio_dir: Path,
        output_dir: Path,
        file_locks: FileLocks,
    ):
        self._resampler = resampler
        self._recognizer = recognizer
        self._audio_dir = audio_dir
        self._output_dir = output_dir
        self._file_locks = file_locks
        self.state = PipelineState.VALIDATED

    def resampled_path_for(self, request: TranscriptionRequest) -> Path:
        """Unique temp WAV path next to the source audio."""
        return self._audio_dir / f"{request.stem}-{uuid.uuid4().hex}{RESAMPLED_EXTENSION}"

    def output_stem_for(self, request: TranscriptionRequest) -> Path:
        return self._output_dir / request.stem

    async def run(self, request: TranscriptionRequest) -> TranscriptionResult:
        """
        Produces the transcript for a validated request.

        Returns:
            TranscriptionResult with the transcript text.

        Raises:
            ResampleFailedError: If audio conversion fails.
            TranscribeFailedError: If the recognition tool fails.
            ResultMissingError: If the recognition tool reported success
                but left no result file.
            ToolTimeoutError: If either tool exceeds its time limit.
        """
        async with self._file_locks.hold(request.file_name):
            try:
                result_path = await self._resample_and_transcribe(request)
                text = self._read_result(result_path)
            except Exception:
                self._transition(PipelineState.FAILED, request)
                raise

        self._transition(PipelineState.SUCCEEDED, request)
        return TranscriptionResult(
            file_name=request.file_name, text=text, result_path=result_path
        )

    async def _resample_and_transcribe(self, request: TranscriptionRequest) -> Path:
        with temporary_file(self.resampled_path_for(request)) as wav_path:
            try:
                self._transition(PipelineState.RESAMPLING, request)
                try:
                    await asyncio.to_thread(
                        self._resampler.resample, request.source_path, wav_path
                    )
                except ExternalToolError as e:
                    raise ResampleFailedError(request.file_name, e) from e

                self._transition(PipelineState.TRANSCRIBING, request)
                output_stem = self.output_stem_for(request)
                self._discard_previous_result(output_stem)
                try:
                    return await self._recognizer.transcribe(wav_path, output_stem)
                except ExternalToolError as e:
                    raise TranscribeFailedError(
                        request.file_name, e.exit_code, e.stderr, e
                    ) from e
            finally:
                self._transition(PipelineState.CLEANUP, request)

    def _discard_previous_result(self, output_stem: Path) -> None:
        """Removes a result left by an earlier run so it is never returned again."""
        previous = output_stem.with_name(output_stem.name + RESULT_EXTENSION)
        if previous.exists():
            previous.unlink(missing_ok=True)
            logger.info("Removed previous result", extra={"result_path": str(previous)})

    def _read_result(self, result_path: Path) -> str:
        try:
            return result_path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            logger.error(
                "Transcript result missing after successful run",
                extra={"result_path": str(result_path)},
            )
            raise ResultMissingError(result_path) from e

    def _transition(self, state: PipelineState, request: TranscriptionRequest) -> None:
        self.state = state
        logger.info(
            "Pipeline state changed",
            extra={"file_name": request.file_name, "state": state.value},
        )
