"""Download-script implementation of the ModelProvisioner interface."""

import logging

from config import WhisperConfig

from .interfaces import ModelProvisioner
from .process_runner import ProcessRunner

logger = logging.getLogger(__name__)


class ScriptModelProvisioner(ModelProvisioner):
    """Fetches ggml models with whisper.cpp's ``download-ggml-model.sh``."""

    def __init__(self, runner: ProcessRunner, config: WhisperConfig):
        self._runner = runner
        self._config = config

    def provision(self, model_name: str) -> None:
        logger.info(
            "Downloading whisper model",
            extra={
                "model": model_name,
                "script": str(self._config.download_script),
            },
        )
        self._runner.run_attached([str(self._config.download_script), model_name])
