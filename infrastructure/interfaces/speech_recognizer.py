"""Abstract interface for speech recognition."""

from abc import ABC, abstractmethod
from pathlib import Path


class SpeechRecognizer(ABC):
    """Abstract base class for speech recognition backends."""

    @abstractmethod
    async def transcribe(self, audio_path: Path, output_stem: Path) -> Path:
        """
        Transcribes a WAV file into a plain-text file.

        Args:
            audio_path: 16 kHz mono WAV file.
            output_stem: Output path without extension; the backend writes
                ``<output_stem>.txt``.

        Returns:
            Path of the text file the backend was asked to write.

        Raises:
            ExternalToolError: If the recognition tool fails.
            ToolTimeoutError: If the recognition tool runs too long.
        """
        pass
