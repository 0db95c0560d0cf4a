"""Infrastructure layer exports."""

from .ffmpeg_resampler import FfmpegResampler
from .process_runner import ProcessRunner
from .script_model_provisioner import ScriptModelProvisioner
from .whisper_cli_recognizer import WhisperCliRecognizer

__all__ = [
    "FfmpegResampler",
    "ProcessRunner",
    "ScriptModelProvisioner",
    "WhisperCliRecognizer",
]
