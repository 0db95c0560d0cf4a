"""whisper.cpp CLI implementation of the SpeechRecognizer interface."""

import logging
from pathlib import Path

from config import RESULT_EXTENSION, WhisperConfig

from .interfaces import SpeechRecognizer
from .process_runner import ProcessRunner

logger = logging.getLogger(__name__)


class WhisperCliRecognizer(SpeechRecognizer):
    """Handles speech recognition with the whisper.cpp ``whisper-cli`` binary."""

    def __init__(self, runner: ProcessRunner, config: WhisperConfig):
        self._runner = runner
        self._config = config

    def build_command(self, audio_path: Path, output_stem: Path) -> list[str]:
        return [
            self._config.bin_path,
            "-m",
            str(self._config.model_path),
            "-f",
            str(audio_path),
            "-otxt",
            "-of",
            str(output_stem),
            "-l",
            self._config.language,
        ]

    async def transcribe(self, audio_path: Path, output_stem: Path) -> Path:
        """
        Runs whisper-cli on the WAV file, asking for a plain-text result.

        whisper-cli appends ``.txt`` to the ``-of`` stem itself.
        """
        logger.info(
            "Running whisper-cli",
            extra={
                "audio_path": str(audio_path),
                "model": self._config.model_name,
                "language": self._config.language,
            },
        )
        await self._runner.run_async(self.build_command(audio_path, output_stem))
        return output_stem.with_name(output_stem.name + RESULT_EXTENSION)
