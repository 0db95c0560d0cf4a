"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, computed_field

SOURCE_EXTENSION = ".ogg"
RESAMPLED_EXTENSION = ".wav"
RESULT_EXTENSION = ".txt"


class StorageConfig(BaseModel, frozen=True):
    """Directories holding source audio, temp audio and transcript results."""

    audio_dir: Path = Path("/audios")
    output_dir: Path = Path("/output")


class WhisperConfig(BaseModel, frozen=True):
    """whisper.cpp CLI and model configuration."""

    bin_path: str = "whisper-cli"
    model_name: str = "base"
    models_dir: Path = Path("/app/models")
    download_script: Path = Path("/app/models/download-ggml-model.sh")
    language: str = "ru"

    @computed_field
    @property
    def model_path(self) -> Path:
        """Returns the path of the ggml model file for the configured model."""
        return self.models_dir / f"ggml-{self.model_name}.bin"


class ResampleConfig(BaseModel, frozen=True):
    """ffmpeg resampling configuration."""

    bin_path: str = "ffmpeg"
    sample_rate: int = 16000
    channels: int = 1


class LimitsConfig(BaseModel, frozen=True):
    """Request and external tool limits."""

    source_extension: str = SOURCE_EXTENSION
    max_file_size_bytes: int = 10 * 1024 * 1024
    tool_timeout_seconds: float = 600.0


class ServerConfig(BaseModel, frozen=True):
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    ensure_model_on_startup: bool = True


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    storage: StorageConfig = StorageConfig()
    whisper: WhisperConfig = WhisperConfig()
    resample: ResampleConfig = ResampleConfig()
    limits: LimitsConfig = LimitsConfig()
    server: ServerConfig = ServerConfig()


def load_config() -> AppConfig:
    """Loads configuration from environment variables (and a local .env file)."""
    load_dotenv(find_dotenv(usecwd=True))
    return AppConfig(
        storage=StorageConfig(
            audio_dir=os.getenv("AUDIO_DIR", "/audios"),
            output_dir=os.getenv("OUTPUT_DIR", "/output"),
        ),
        whisper=WhisperConfig(
            bin_path=os.getenv("WHISPER_BIN", "whisper-cli"),
            model_name=os.getenv("WHISPER_MODEL") or "base",
            models_dir=os.getenv("WHISPER_MODELS_DIR", "/app/models"),
            download_script=os.getenv(
                "WHISPER_DOWNLOAD_SCRIPT", "/app/models/download-ggml-model.sh"
            ),
            language=os.getenv("WHISPER_LANGUAGE", "ru"),
        ),
        resample=ResampleConfig(
            bin_path=os.getenv("FFMPEG_BIN", "ffmpeg"),
        ),
        limits=LimitsConfig(
            max_file_size_bytes=os.getenv("MAX_FILE_SIZE_BYTES", 10 * 1024 * 1024),
            tool_timeout_seconds=os.getenv("TOOL_TIMEOUT_SECONDS", 600.0),
        ),
        server=ServerConfig(
            host=os.getenv("HOST", "0.0.0.0"),
            port=os.getenv("PORT", 3000),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        ),
    )
