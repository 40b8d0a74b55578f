import json

import httpx
import pytest
from typer.testing import CliRunner

from azure_tts import SpeechClient, cli

CLEAN_ENV = {"AZURE_SPEECH_REGION": None, "AZURE_SPEECH_KEY": None, "AZURE_SPEECH_TOKEN": None}

runner = CliRunner()


@pytest.fixture
def service(monkeypatch, voice_records):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/issueToken"):
            if request.headers["Ocp-Apim-Subscription-Key"] != "good-key":
                return httpx.Response(401, json={"error": {"message": "invalid key"}})
            return httpx.Response(200, text="cli-token")
        if request.url.path.endswith("/voices/list"):
            return httpx.Response(200, json=voice_records)
        return httpx.Response(200, content=b"cli-audio")

    monkeypatch.setattr(
        cli,
        "_make_client",
        lambda config: SpeechClient(config, transport=httpx.MockTransport(handler)),
    )
    return requests


def _invoke(*args, key="good-key"):
    return runner.invoke(cli.app, ["--region", "westeurope", "--key", key, *args], env=CLEAN_ENV)


def test_token_command_prints_token(service):
    result = _invoke("token")

    assert result.exit_code == 0
    assert result.output.strip() == "cli-token"


def test_token_command_with_bad_key_exits_1(service):
    result = _invoke("token", key="bad-key")

    assert result.exit_code == 1


def test_voices_command_filters_by_locale(service):
    result = _invoke("voices", "--locale", "en-GB")

    assert result.exit_code == 0
    assert "en-GB-SoniaNeural" in result.output
    assert "de-DE-ConradNeural" not in result.output
    assert service[1].headers["Authorization"] == "Bearer cli-token"


def test_voices_command_json_output(service, voice_records):
    result = _invoke("voices", "--json")

    assert result.exit_code == 0
    assert json.loads(result.output) == voice_records


def test_speak_command_writes_file(service, tmp_path):
    target = tmp_path / "speech.mp3"

    result = _invoke("speak", "Hi, this is a test.", "--out", str(target), "--voice", "en-GB-SoniaNeural")

    assert result.exit_code == 0
    assert target.read_bytes() == b"cli-audio"
    assert [request.url.path for request in service] == [
        "/sts/v1.0/issueToken",
        "/cognitiveservices/voices/list",
        "/cognitiveservices/v1",
    ]
    assert "name='en-GB-SoniaNeural'" in service[-1].content.decode("utf-8")


def test_speak_command_without_lookup_skips_voice_list(service, tmp_path):
    target = tmp_path / "speech.wav"

    result = _invoke(
        "speak", "hello", "--out", str(target),
        "--voice", "fr-FR-DeniseNeural", "--format", "riff-24khz-16bit-mono-pcm", "--no-lookup",
    )

    assert result.exit_code == 0
    assert [request.url.path for request in service] == ["/sts/v1.0/issueToken", "/cognitiveservices/v1"]
    assert service[-1].headers["X-Microsoft-OutputFormat"] == "riff-24khz-16bit-mono-pcm"


def test_speak_command_unknown_voice_exits_2(service, tmp_path):
    target = tmp_path / "speech.mp3"

    result = _invoke("speak", "hello", "--out", str(target), "--voice", "xx-XX-NobodyNeural")

    assert result.exit_code == 2
    assert not target.exists()
    assert all(not request.url.path.endswith("/v1") for request in service)


def test_missing_region_exits_2(service):
    result = runner.invoke(cli.app, ["--key", "good-key", "token"], env=CLEAN_ENV)

    assert result.exit_code == 2
    assert service == []


def test_speak_command_defaults_output_name_to_format_extension(service, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = _invoke("speak", "hello", "--format", "riff-24khz-16bit-mono-pcm", "--no-lookup")

    assert result.exit_code == 0
    assert (tmp_path / "speech.wav").read_bytes() == b"cli-audio"


def test_speak_command_without_lookup_rejects_unknown_voice(service, tmp_path):
    target = tmp_path / "speech.mp3"

    result = _invoke("speak", "hello", "--out", str(target), "--voice", "xx-XX-NobodyNeural", "--no-lookup")

    assert result.exit_code == 2
    assert not target.exists()
    assert [request.url.path for request in service] == ["/sts/v1.0/issueToken"]
