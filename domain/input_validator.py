"""Validation of incoming transcription requests."""

import logging
from pathlib import Path
from typing import Any

from exceptions import (
    FileTooLargeError,
    InvalidFileNameError,
    MissingParameterError,
    SourceFileNotFoundError,
    UnsupportedExtensionError,
)

from .models import TranscriptionRequest

logger = logging.getLogger(__name__)

_FORBIDDEN_NAME_PARTS = ("/", "\\", "\x00")


class InputValidator:
    """Turns a raw "file" value into a TranscriptionRequest.

    Checks run in a fixed order (presence, extension, name safety, existence,
    size) and only stat the filesystem; nothing is written.
    """

    def __init__(self, audio_dir: Path, required_extension: str, max_size_bytes: int):
        self._audio_dir = audio_dir
        self._required_extension = required_extension
        self._max_size_bytes = max_size_bytes

    def validate(self, candidate: Any) -> TranscriptionRequest:
        """
        Validates the requested file name against the audio directory.

        Raises:
            MissingParameterError: If the candidate is absent, empty or not a string.
            UnsupportedExtensionError: If it lacks the required extension.
            InvalidFileNameError: If it is not a plain name inside the audio directory.
            SourceFileNotFoundError: If no such file exists.
            FileTooLargeError: If the file exceeds the size ceiling.
        """
        if not candidate or not isinstance(candidate, str):
            raise MissingParameterError("file")

        if not candidate.endswith(self._required_extension):
            raise UnsupportedExtensionError(candidate, self._required_extension)

        source_path = self._resolve_source_path(candidate)

        if not source_path.is_file():
            raise SourceFileNotFoundError(candidate, self._audio_dir)

        size_bytes = source_path.stat().st_size
        if size_bytes > self._max_size_bytes:
            raise FileTooLargeError(candidate, size_bytes, self._max_size_bytes)

        logger.info(
            "Request validated",
            extra={"file_name": candidate, "size_bytes": size_bytes},
        )
        return TranscriptionRequest(
            file_name=candidate,
            source_path=source_path,
            size_bytes=size_bytes,
        )

    def _resolve_source_path(self, file_name: str) -> Path:
        """Joins the name onto the audio directory, refusing anything but a plain name."""
        if any(part in file_name for part in _FORBIDDEN_NAME_PARTS):
            raise InvalidFileNameError(file_name)
        if file_name[: -len(self._required_extension)] in ("", ".", ".."):
            raise InvalidFileNameError(file_name)

        source_path = self._audio_dir / file_name
        if source_path.parent != self._audio_dir or source_path.name != file_name:
            raise InvalidFileNameError(file_name)
        return source_path
