"""Abstract interface for audio resampling."""

from abc import ABC, abstractmethod
from pathlib import Path


class AudioResampler(ABC):
    """Abstract base class for tools converting audio to recognizer input."""

    @abstractmethod
    def resample(self, source_path: Path, target_path: Path) -> None:
        """
        Converts the source audio into a mono WAV file at the target path.

        Blocks until the conversion finishes.

        Args:
            source_path: Existing audio file to convert.
            target_path: WAV file to create (overwritten if present).

        Raises:
            ExternalToolError: If the conversion tool fails.
            ToolTimeoutError: If the conversion tool runs too long.
        """
        pass
