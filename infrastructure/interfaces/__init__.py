"""Infrastructure interface exports."""

from .audio_resampler import AudioResampler
from .model_provisioner import ModelProvisioner
from .speech_recognizer import SpeechRecognizer

__all__ = ["AudioResampler", "ModelProvisioner", "SpeechRecognizer"]
