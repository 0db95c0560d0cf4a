"""Startup check that the whisper model is present locally."""

import logging

from config import WhisperConfig
from exceptions import ExternalToolError, ModelProvisioningError
from infrastructure.interfaces import ModelProvisioner

logger = logging.getLogger(__name__)


class ModelReadinessGate:
    """Ensures the configured model file exists before requests are served."""

    def __init__(self, config: WhisperConfig, provisioner: ModelProvisioner):
        self._config = config
        self._provisioner = provisioner
        self.ready = False

    def ensure_ready(self) -> None:
        """
        Checks for the model file and downloads it if absent.

        Raises:
            ModelProvisioningError: If the download fails or the model is
                still missing afterwards.
        """
        model_path = self._config.model_path
        if model_path.exists():
            logger.info(
                "Model already exists",
                extra={"model": self._config.model_name, "model_path": str(model_path)},
            )
            self.ready = True
            return

        logger.info(
            "Model not found, downloading",
            extra={"model": self._config.model_name, "model_path": str(model_path)},
        )
        try:
            self._provisioner.provision(self._config.model_name)
        except ExternalToolError as e:
            logger.error(
                "Model download failed",
                extra={"model": self._config.model_name, "exit_code": e.exit_code},
            )
            raise ModelProvisioningError(self._config.model_name, e) from e

        if not model_path.exists():
            logger.error(
                "Model still missing after download",
                extra={"model": self._config.model_name, "model_path": str(model_path)},
            )
            raise ModelProvisioningError(self._config.model_name)

        logger.info("Model downloaded", extra={"model": self._config.model_name})
        self.ready = True
