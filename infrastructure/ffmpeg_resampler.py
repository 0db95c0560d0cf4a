"""ffmpeg implementation of the AudioResampler interface."""

import logging
from pathlib import Path

from config import ResampleConfig

from .interfaces import AudioResampler
from .process_runner import ProcessRunner

logger = logging.getLogger(__name__)


class FfmpegResampler(AudioResampler):
    """Converts audio to 16 kHz mono WAV with the ffmpeg CLI."""

    def __init__(self, runner: ProcessRunner, config: ResampleConfig):
        self._runner = runner
        self._config = config

    def build_command(self, source_path: Path, target_path: Path) -> list[str]:
        return [
            self._config.bin_path,
            "-y",
            "-i",
            str(source_path),
            "-ar",
            str(self._config.sample_rate),
            "-ac",
            str(self._config.channels),
            str(target_path),
        ]

    def resample(self, source_path: Path, target_path: Path) -> None:
        logger.info(
            "Converting audio to WAV",
            extra={"source_path": str(source_path), "target_path": str(target_path)},
        )
        self._runner.run(self.build_command(source_path, target_path))
