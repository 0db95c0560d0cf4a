from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from config import ServerConfig
from exceptions import ModelProvisioningError
from main import create_app

FAILING_WHISPER = 'echo "whisper: failed to load model" >&2\nexit 1'
SILENT_WHISPER = "exit 0"
FAILING_FFMPEG = 'echo "Invalid data found when processing input" >&2\nexit 1'


@pytest.fixture
def client_for(build_config):
    clients = []

    def _client(**overrides) -> TestClient:
        client = TestClient(create_app(build_config(**overrides)))
        client.__enter__()
        clients.append(client)
        return client

    yield _client

    for client in clients:
        client.__exit__(None, None, None)


def _calls(calls_log: Path) -> list[str]:
    if not calls_log.exists():
        return []
    return calls_log.read_text(encoding="utf-8").splitlines()


def test_successful_transcription(client_for, write_audio, audio_dir, output_dir, calls_log) -> None:
    write_audio("call1.ogg", 2 * 1024 * 1024)
    client = client_for()

    response = client.post("/transcribe", json={"file": "call1.ogg"})

    assert response.status_code == 200
    assert response.json() == {"text": "привет"}
    assert (output_dir / "call1.txt").read_text(encoding="utf-8") == "привет"
    assert list(audio_dir.glob("*.wav")) == []
    assert not (audio_dir / "call1.wav").exists()

    ffmpeg_call, whisper_call = _calls(calls_log)
    assert ffmpeg_call.startswith("ffmpeg -y -i ")
    assert " -ar 16000 -ac 1 " in ffmpeg_call
    assert whisper_call.startswith("whisper-cli -m ")
    assert whisper_call.endswith(f"-otxt -of {output_dir / 'call1'} -l ru")


def test_resubmission_reruns_pipeline(client_for, write_audio, calls_log) -> None:
    write_audio("call1.ogg", 1024)
    client = client_for()

    first = client.post("/transcribe", json={"file": "call1.ogg"})
    second = client.post("/transcribe", json={"file": "call1.ogg"})

    assert first.json() == second.json() == {"text": "привет"}
    assert len(_calls(calls_log)) == 4


@pytest.mark.parametrize(
    "body",
    [{}, {"file": None}, {"file": 12}, {"file": ""}, {"other": "call1.ogg"}],
)
def test_missing_parameter_returns_400(client_for, calls_log, body) -> None:
    response = client_for().post("/transcribe", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": 'Missing or invalid "file" parameter'}
    assert _calls(calls_log) == []


def test_non_json_body_returns_400(client_for) -> None:
    response = client_for().post(
        "/transcribe", content=b"file=call1.ogg", headers={"content-type": "text/plain"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": 'Missing or invalid "file" parameter'}


def test_json_array_body_returns_400(client_for) -> None:
    response = client_for().post("/transcribe", json=["call1.ogg"])
    assert response.status_code == 400


@pytest.mark.parametrize("name", ["call1.wav", "call1.mp3", "call1"])
def test_wrong_extension_returns_400(client_for, write_audio, calls_log, name) -> None:
    write_audio(name, 1024)

    response = client_for().post("/transcribe", json={"file": name})

    assert response.status_code == 400
    assert response.json() == {"error": '"file" must be an .ogg file'}
    assert _calls(calls_log) == []


def test_path_traversal_returns_400(client_for, tmp_path, calls_log) -> None:
    (tmp_path / "secret.ogg").write_bytes(b"x")

    response = client_for().post("/transcribe", json={"file": "../secret.ogg"})

    assert response.status_code == 400
    assert response.json() == {"error": 'Invalid "file" name'}
    assert _calls(calls_log) == []


def test_missing_file_returns_404(client_for, audio_dir, output_dir, calls_log) -> None:
    response = client_for().post("/transcribe", json={"file": "ghost.ogg"})

    assert response.status_code == 404
    assert response.json() == {"error": f"File ghost.ogg not found in {audio_dir}"}
    assert list(audio_dir.iterdir()) == []
    assert list(output_dir.iterdir()) == []
    assert _calls(calls_log) == []


def test_too_large_file_returns_413(client_for, write_audio, calls_log) -> None:
    write_audio("huge.ogg", 15 * 1024 * 1024)

    response = client_for().post("/transcribe", json={"file": "huge.ogg"})

    assert response.status_code == 413
    assert response.json() == {
        "error": "File huge.ogg is too large (15.00 MB). Max allowed is 10.00 MB."
    }
    assert _calls(calls_log) == []


def test_size_ceiling_is_configurable(client_for, write_audio) -> None:
    write_audio("small.ogg", 3 * 1024 * 1024)

    response = client_for(max_file_size_bytes=2 * 1024 * 1024).post(
        "/transcribe", json={"file": "small.ogg"}
    )

    assert response.status_code == 413
    assert "(3.00 MB). Max allowed is 2.00 MB." in response.json()["error"]


def test_whisper_failure_returns_generic_500_and_cleans_up(client_for, write_audio, audio_dir) -> None:
    write_audio("call1.ogg", 1024)

    response = client_for(whisper_body=FAILING_WHISPER).post(
        "/transcribe", json={"file": "call1.ogg"}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Whisper CLI failed"}
    assert list(audio_dir.glob("*.wav")) == []


def test_resample_failure_returns_500_without_recognition(client_for, write_audio, calls_log) -> None:
    write_audio("call1.ogg", 1024)

    response = client_for(ffmpeg_body=FAILING_FFMPEG).post(
        "/transcribe", json={"file": "call1.ogg"}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Audio conversion failed"}
    assert [call.split()[0] for call in _calls(calls_log)] == ["ffmpeg"]


def test_missing_result_returns_internal_error(client_for, write_audio, audio_dir) -> None:
    write_audio("call1.ogg", 1024)

    response = client_for(whisper_body=SILENT_WHISPER).post(
        "/transcribe", json={"file": "call1.ogg"}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal error"}
    assert list(audio_dir.glob("*.wav")) == []


def test_tool_timeout_returns_504_and_cleans_up(client_for, write_audio, audio_dir) -> None:
    write_audio("call1.ogg", 1024)

    response = client_for(whisper_body="exec sleep 5", tool_timeout_seconds=0.5).post(
        "/transcribe", json={"file": "call1.ogg"}
    )

    assert response.status_code == 504
    assert response.json() == {"error": "Transcription timed out"}
    assert list(audio_dir.glob("*.wav")) == []


def test_unexpected_error_returns_500_without_details(client_for, write_audio, monkeypatch) -> None:
    write_audio("call1.ogg", 1024)

    async def explode(self, request):
        raise RuntimeError("secret internal detail /app/models")

    monkeypatch.setattr("domain.transcription_pipeline.TranscriptionPipeline.run", explode)

    response = client_for().post("/transcribe", json={"file": "call1.ogg"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal error"}


def test_healthz_reports_ready_model(client_for) -> None:
    response = client_for().get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "model": "base", "model_ready": True}


def test_healthz_before_startup_is_503(build_config) -> None:
    client = TestClient(create_app(build_config()))

    response = client.get("/healthz")

    assert response.status_code == 503
    assert response.json()["model_ready"] is False


def test_startup_fails_when_model_cannot_be_provisioned(build_config, models_dir) -> None:
    (models_dir / "ggml-base.bin").unlink()
    config = build_config()
    script = config.whisper.download_script
    script.write_text("#!/bin/sh\nexit 1\n", encoding="utf-8")
    script.chmod(0o755)

    app = create_app(config)

    with pytest.raises(ModelProvisioningError):
        with TestClient(app):
            pass

    assert not app.state.readiness_gate.ready


def test_startup_check_can_be_disabled(build_config, models_dir) -> None:
    (models_dir / "ggml-base.bin").unlink()
    config = build_config().model_copy(
        update={"server": ServerConfig(ensure_model_on_startup=False)}
    )

    with TestClient(create_app(config)) as client:
        assert client.get("/healthz").status_code == 200


def test_stale_result_is_not_returned_when_whisper_writes_nothing(
    client_for, write_audio, output_dir
) -> None:
    write_audio("call1.ogg", 1024)
    first = client_for().post("/transcribe", json={"file": "call1.ogg"})
    assert first.status_code == 200

    second = client_for(whisper_body=SILENT_WHISPER).post(
        "/transcribe", json={"file": "call1.ogg"}
    )

    assert second.status_code == 500
    assert second.json() == {"error": "Internal error"}
    assert not (output_dir / "call1.txt").exists()


def test_extension_only_name_returns_400(client_for, write_audio, output_dir, calls_log) -> None:
    write_audio(".ogg", 1024)

    response = client_for().post("/transcribe", json={"file": ".ogg"})

    assert response.status_code == 400
    assert response.json() == {"error": 'Invalid "file" name'}
    assert list(output_dir.iterdir()) == []
    assert _calls(calls_log) == []
