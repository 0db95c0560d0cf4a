import stat
from pathlib import Path

import pytest

from config import AppConfig, LimitsConfig, ResampleConfig, ServerConfig, StorageConfig, WhisperConfig


@pytest.fixture
def calls_log(tmp_path: Path) -> Path:
    return tmp_path / "calls.log"


@pytest.fixture
def make_tool(tmp_path: Path, calls_log: Path):
    """Writes an executable shell script standing in for an external tool.

    Every invocation is appended to ``calls.log`` before the body runs.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def _make(name: str, body: str) -> Path:
        script = bin_dir / name
        script.write_text(
            f'#!/bin/sh\necho "{name} $*" >> "{calls_log}"\n{body}\n',
            encoding="utf-8",
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


# ffmpeg -y -i <src> -ar 16000 -ac 1 <dst>
FAKE_FFMPEG = 'cp "$3" "$8"'
# whisper-cli -m <model> -f <wav> -otxt -of <stem> -l <lang>
FAKE_WHISPER = 'test -f "$4" || exit 3\nprintf "привет" > "$7.txt"'


@pytest.fixture
def audio_dir(tmp_path: Path) -> Path:
    path = tmp_path / "audios"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "output"
    path.mkdir()
    return path


@pytest.fixture
def models_dir(tmp_path: Path) -> Path:
    path = tmp_path / "models"
    path.mkdir()
    (path / "ggml-base.bin").write_bytes(b"model")
    return path


@pytest.fixture
def build_config(audio_dir: Path, output_dir: Path, models_dir: Path, make_tool):
    """Returns a factory for AppConfig pointing at fake tools inside tmp_path."""

    def _build(
        ffmpeg_body: str = FAKE_FFMPEG,
        whisper_body: str = FAKE_WHISPER,
        max_file_size_bytes: int = 10 * 1024 * 1024,
        tool_timeout_seconds: float = 10.0,
    ) -> AppConfig:
        return AppConfig(
            storage=StorageConfig(audio_dir=audio_dir, output_dir=output_dir),
            whisper=WhisperConfig(
                bin_path=str(make_tool("whisper-cli", whisper_body)),
                models_dir=models_dir,
                download_script=models_dir / "download-ggml-model.sh",
            ),
            resample=ResampleConfig(bin_path=str(make_tool("ffmpeg", ffmpeg_body))),
            limits=LimitsConfig(
                max_file_size_bytes=max_file_size_bytes,
                tool_timeout_seconds=tool_timeout_seconds,
            ),
            server=ServerConfig(),
        )

    return _build


@pytest.fixture
def write_audio(audio_dir: Path):
    """Creates a sparse source file of the given size in the audio directory."""

    def _write(name: str, size_bytes: int) -> Path:
        path = audio_dir / name
        with open(path, "wb") as f:
            f.truncate(size_bytes)
        return path

    return _write
