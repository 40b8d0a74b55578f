import httpx
import pytest

from azure_tts import DEFAULT_OUTPUT_FORMAT, OutputFormat, Region, SpeechClient, SpeechConfig, ValidationError


def test_region_parse_accepts_members_and_case_insensitive_names():
    assert Region.parse(Region.EAST_US) is Region.EAST_US
    assert Region.parse("WestEurope") is Region.WEST_EUROPE
    assert Region.parse(" eastus2 ") is Region.EAST_US_2


def test_region_parse_rejects_unknown_names():
    with pytest.raises(ValidationError):
        Region.parse("moonbase")
    with pytest.raises(ValueError):
        Region.parse("")


def test_output_format_parse_and_extensions():
    assert OutputFormat.parse("audio-24khz-48kbitrate-mono-mp3") is DEFAULT_OUTPUT_FORMAT
    assert OutputFormat.RIFF_24KHZ_16BIT_MONO_PCM.extension == ".wav"
    assert OutputFormat.RAW_16KHZ_16BIT_MONO_PCM.extension == ".pcm"
    assert OutputFormat.AUDIO_48KHZ_192KBITRATE_MONO_MP3.extension == ".mp3"
    assert OutputFormat.OGG_48KHZ_16BIT_MONO_OPUS.extension == ".ogg"
    assert OutputFormat.WEBM_24KHZ_16BIT_MONO_OPUS.extension == ".webm"
    assert OutputFormat.AUDIO_24KHZ_16BIT_48KBPS_MONO_OPUS.extension == ".opus"
    with pytest.raises(ValidationError):
        OutputFormat.parse("audio-1khz-mono-wma")


def test_speech_config_urls():
    config = SpeechConfig.from_subscription("key123", region="westeurope")

    assert config.region is Region.WEST_EUROPE
    assert config.token_url == "https://westeurope.api.cognitive.microsoft.com/sts/v1.0/issueToken"
    assert config.voices_url == "https://westeurope.tts.speech.microsoft.com/cognitiveservices/voices/list"
    assert config.tts_url == "https://westeurope.tts.speech.microsoft.com/cognitiveservices/v1"


def test_speech_config_endpoint_overrides():
    config = SpeechConfig(
        region="eastus",
        subscription_key="key123",
        endpoint="https://tts.example.test/",
        token_endpoint="https://sts.example.test/",
    )

    assert config.tts_url == "https://tts.example.test/cognitiveservices/v1"
    assert config.voices_url == "https://tts.example.test/cognitiveservices/voices/list"
    assert config.token_url == "https://sts.example.test/sts/v1.0/issueToken"


def test_speech_config_rejects_unknown_region_and_format():
    with pytest.raises(ValidationError):
        SpeechConfig(region="atlantis", subscription_key="key")
    with pytest.raises(ValidationError):
        SpeechConfig(region="eastus", subscription_key="key", output_format="mp3")


def test_speech_config_from_env():
    config = SpeechConfig.from_env(
        {
            "AZURE_SPEECH_REGION": "northeurope",
            "AZURE_SPEECH_KEY": "env-key",
            "AZURE_SPEECH_VOICE": "en-IE-EmilyNeural",
            "AZURE_SPEECH_OUTPUT_FORMAT": "ogg-24khz-16bit-mono-opus",
        }
    )

    assert config.region is Region.NORTH_EUROPE
    assert config.subscription_key == "env-key"
    assert config.authorization_token is None
    assert config.voice_name == "en-IE-EmilyNeural"
    assert config.output_format is OutputFormat.OGG_24KHZ_16BIT_MONO_OPUS


def test_speech_config_from_env_overrides_and_missing_region():
    config = SpeechConfig.from_env({"AZURE_SPEECH_REGION": "eastus", "AZURE_SPEECH_KEY": "k"}, region="westus2")
    assert config.region is Region.WEST_US_2

    with pytest.raises(ValidationError):
        SpeechConfig.from_env({"AZURE_SPEECH_KEY": "k"})


def test_client_requires_key_or_token():
    config = SpeechConfig(region="eastus")

    with pytest.raises(ValidationError):
        config.validate()
    with pytest.raises(ValidationError):
        SpeechClient(config, transport=httpx.MockTransport(lambda request: httpx.Response(200)))
