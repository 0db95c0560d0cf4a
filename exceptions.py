"""Custom exceptions for the transcription service."""

from pathlib import Path

BYTES_PER_MB = 1024 * 1024


class MissingParameterError(Exception):
    """Raised when the "file" parameter is absent or not a string."""

    def __init__(self, parameter: str = "file"):
        self.parameter = parameter
        super().__init__(f"Missing or invalid '{parameter}' parameter")


class UnsupportedExtensionError(Exception):
    """Raised when the requested file does not have the required extension."""

    def __init__(self, file_name: str, required_extension: str):
        self.file_name = file_name
        self.required_extension = required_extension
        super().__init__(f"'{file_name}' must be a {required_extension} file")


class InvalidFileNameError(Exception):
    """Raised when the requested file name would escape the audio directory."""

    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"'{file_name}' is not a plain file name")


class SourceFileNotFoundError(Exception):
    """Raised when the requested source audio file does not exist."""

    def __init__(self, file_name: str, directory: Path):
        self.file_name = file_name
        self.directory = directory
        super().__init__(f"File {file_name} not found in {directory}")


class FileTooLargeError(Exception):
    """Raised when the source audio file exceeds the size ceiling."""

    def __init__(self, file_name: str, size_bytes: int, max_size_bytes: int):
        self.file_name = file_name
        self.size_bytes = size_bytes
        self.max_size_bytes = max_size_bytes
        super().__init__(
            f"File {file_name} is too large ({self.size_mb:.2f} MB). "
            f"Max allowed is {self.max_size_mb:.2f} MB."
        )

    @property
    def size_mb(self) -> float:
        return self.size_bytes / BYTES_PER_MB

    @property
    def max_size_mb(self) -> float:
        return self.max_size_bytes / BYTES_PER_MB


class ExternalToolError(Exception):
    """Raised when an external program exits non-zero or cannot be started."""

    def __init__(self, program: str, exit_code: int | None, stderr: str = ""):
        self.program = program
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(f"'{program}' failed with exit code {exit_code}")


class ToolTimeoutError(Exception):
    """Raised when an external program runs longer than the configured bound."""

    def __init__(self, program: str, timeout_seconds: float):
        self.program = program
        self.timeout_seconds = timeout_seconds
        super().__init__(f"'{program}' timed out after {timeout_seconds} seconds")


class ResampleFailedError(Exception):
    """Raised when converting the source audio to WAV fails."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Failed to resample audio file '{file_name}'")


class TranscribeFailedError(Exception):
    """Raised when the recognition tool fails on the resampled audio."""

    def __init__(
        self,
        file_name: str,
        exit_code: int | None,
        stderr: str = "",
        cause: Exception | None = None,
    ):
        self.file_name = file_name
        self.exit_code = exit_code
        self.stderr = stderr
        self.cause = cause
        super().__init__(
            f"Failed to transcribe audio file '{file_name}' (exit code {exit_code})"
        )


class ResultMissingError(Exception):
    """Raised when the recognition tool succeeded but wrote no result file."""

    def __init__(self, result_path: Path):
        self.result_path = result_path
        super().__init__(f"Transcript result '{result_path}' was not produced")


class ModelProvisioningError(Exception):
    """Raised when the recognition model cannot be made available at startup."""

    def __init__(self, model_name: str, cause: Exception | None = None):
        self.model_name = model_name
        self.cause = cause
        super().__init__(f"Failed to provision whisper model '{model_name}'")
