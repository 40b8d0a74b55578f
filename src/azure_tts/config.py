import os
from enum import Enum
from typing import Mapping, Optional, Union

from .errors import ValidationError


class _ParsableEnum(str, Enum):
    @classmethod
    def parse(cls, value: Union[str, "_ParsableEnum"]):
        """Return the member for ``value`` or raise ValidationError."""
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValidationError(f"Unsupported {cls.__name__} value: {value!r}.")

    def __str__(self) -> str:
        return self.value


class Region(_ParsableEnum):
    """Azure data-center identifiers that host the speech service."""

    AUSTRALIA_EAST = "australiaeast"
    BRAZIL_SOUTH = "brazilsouth"
    CANADA_CENTRAL = "canadacentral"
    CENTRAL_INDIA = "centralindia"
    CENTRAL_US = "centralus"
    EAST_ASIA = "eastasia"
    EAST_US = "eastus"
    EAST_US_2 = "eastus2"
    FRANCE_CENTRAL = "francecentral"
    GERMANY_WEST_CENTRAL = "germanywestcentral"
    JAPAN_EAST = "japaneast"
    JAPAN_WEST = "japanwest"
    KOREA_CENTRAL = "koreacentral"
    NORTH_CENTRAL_US = "northcentralus"
    NORTH_EUROPE = "northeurope"
    NORWAY_EAST = "norwayeast"
    QATAR_CENTRAL = "qatarcentral"
    SOUTH_AFRICA_NORTH = "southafricanorth"
    SOUTH_CENTRAL_US = "southcentralus"
    SOUTHEAST_ASIA = "southeastasia"
    SWEDEN_CENTRAL = "swedencentral"
    SWITZERLAND_NORTH = "switzerlandnorth"
    SWITZERLAND_WEST = "switzerlandwest"
    UAE_NORTH = "uaenorth"
    UK_SOUTH = "uksouth"
    WEST_CENTRAL_US = "westcentralus"
    WEST_EUROPE = "westeurope"
    WEST_US = "westus"
    WEST_US_2 = "westus2"
    WEST_US_3 = "westus3"


class OutputFormat(_ParsableEnum):
    """Audio encodings accepted in the ``X-Microsoft-OutputFormat`` header."""

    RAW_8KHZ_8BIT_MONO_MULAW = "raw-8khz-8bit-mono-mulaw"
    RAW_8KHZ_8BIT_MONO_ALAW = "raw-8khz-8bit-mono-alaw"
    RAW_8KHZ_16BIT_MONO_PCM = "raw-8khz-16bit-mono-pcm"
    RAW_16KHZ_16BIT_MONO_PCM = "raw-16khz-16bit-mono-pcm"
    RAW_22050HZ_16BIT_MONO_PCM = "raw-22050hz-16bit-mono-pcm"
    RAW_24KHZ_16BIT_MONO_PCM = "raw-24khz-16bit-mono-pcm"
    RAW_44100HZ_16BIT_MONO_PCM = "raw-44100hz-16bit-mono-pcm"
    RAW_48KHZ_16BIT_MONO_PCM = "raw-48khz-16bit-mono-pcm"
    RIFF_8KHZ_8BIT_MONO_MULAW = "riff-8khz-8bit-mono-mulaw"
    RIFF_8KHZ_8BIT_MONO_ALAW = "riff-8khz-8bit-mono-alaw"
    RIFF_8KHZ_16BIT_MONO_PCM = "riff-8khz-16bit-mono-pcm"
    RIFF_16KHZ_16BIT_MONO_PCM = "riff-16khz-16bit-mono-pcm"
    RIFF_22050HZ_16BIT_MONO_PCM = "riff-22050hz-16bit-mono-pcm"
    RIFF_24KHZ_16BIT_MONO_PCM = "riff-24khz-16bit-mono-pcm"
    RIFF_44100HZ_16BIT_MONO_PCM = "riff-44100hz-16bit-mono-pcm"
    RIFF_48KHZ_16BIT_MONO_PCM = "riff-48khz-16bit-mono-pcm"
    AUDIO_16KHZ_32KBITRATE_MONO_MP3 = "audio-16khz-32kbitrate-mono-mp3"
    AUDIO_16KHZ_64KBITRATE_MONO_MP3 = "audio-16khz-64kbitrate-mono-mp3"
    AUDIO_16KHZ_128KBITRATE_MONO_MP3 = "audio-16khz-128kbitrate-mono-mp3"
    AUDIO_24KHZ_48KBITRATE_MONO_MP3 = "audio-24khz-48kbitrate-mono-mp3"
    AUDIO_24KHZ_96KBITRATE_MONO_MP3 = "audio-24khz-96kbitrate-mono-mp3"
    AUDIO_24KHZ_160KBITRATE_MONO_MP3 = "audio-24khz-160kbitrate-mono-mp3"
    AUDIO_48KHZ_96KBITRATE_MONO_MP3 = "audio-48khz-96kbitrate-mono-mp3"
    AUDIO_48KHZ_192KBITRATE_MONO_MP3 = "audio-48khz-192kbitrate-mono-mp3"
    OGG_16KHZ_16BIT_MONO_OPUS = "ogg-16khz-16bit-mono-opus"
    OGG_24KHZ_16BIT_MONO_OPUS = "ogg-24khz-16bit-mono-opus"
    OGG_48KHZ_16BIT_MONO_OPUS = "ogg-48khz-16bit-mono-opus"
    WEBM_16KHZ_16BIT_MONO_OPUS = "webm-16khz-16bit-mono-opus"
    WEBM_24KHZ_16BIT_MONO_OPUS = "webm-24khz-16bit-mono-opus"
    WEBM_24KHZ_16BIT_24KBPS_MONO_OPUS = "webm-24khz-16bit-24kbps-mono-opus"
    AUDIO_16KHZ_16BIT_32KBPS_MONO_OPUS = "audio-16khz-16bit-32kbps-mono-opus"
    AUDIO_24KHZ_16BIT_24KBPS_MONO_OPUS = "audio-24khz-16bit-24kbps-mono-opus"
    AUDIO_24KHZ_16BIT_48KBPS_MONO_OPUS = "audio-24khz-16bit-48kbps-mono-opus"
    AMR_WB_16000HZ = "amr-wb-16000hz"
    G722_16KHZ_64KBPS = "g722-16khz-64kbps"

    @property
    def extension(self) -> str:
        """Conventional file suffix for audio in this encoding."""
        value = self.value
        if value.startswith("riff-"):
            return ".wav"
        if value.startswith("raw-"):
            return ".pcm"
        if value.endswith("-mp3"):
            return ".mp3"
        if value.startswith("ogg-"):
            return ".ogg"
        if value.startswith("webm-"):
            return ".webm"
        if value.startswith("amr-"):
            return ".amr"
        if value.startswith("g722-"):
            return ".g722"
        return ".opus"


DEFAULT_OUTPUT_FORMAT = OutputFormat.AUDIO_24KHZ_48KBITRATE_MONO_MP3
DEFAULT_VOICE_NAME = "en-US-JennyNeural"


class SpeechConfig:
    """Configuration for the Azure Speech REST endpoints."""

    def __init__(
        self,
        *,
        region: Union[str, Region],
        subscription_key: Optional[str] = None,
        authorization_token: Optional[str] = None,
        endpoint: Optional[str] = None,
        token_endpoint: Optional[str] = None,
        voice_name: str = DEFAULT_VOICE_NAME,
        output_format: Union[str, OutputFormat] = DEFAULT_OUTPUT_FORMAT,
        timeout: float = 15.0,
    ) -> None:
        """Initialize SpeechConfig.

        Args:
            region: Azure region (e.g., 'eastus', 'westeurope')
            subscription_key: Speech resource key, exchanged for bearer tokens
            authorization_token: Pre-issued bearer token (alternative to a key)
            endpoint: Custom base URL for the tts host (optional)
            token_endpoint: Custom base URL for the token host (optional)
            voice_name: Default voice for synthesis
            output_format: Default audio encoding for synthesis
            timeout: HTTP request timeout in seconds
        """
        self.region = Region.parse(region)
        self.subscription_key = subscription_key
        self.authorization_token = authorization_token
        self.endpoint = endpoint
        self.token_endpoint = token_endpoint
        self.voice_name = voice_name
        self.output_format = OutputFormat.parse(output_format)
        self.timeout = timeout

    @classmethod
    def from_subscription(cls, subscription_key: str, region: Union[str, Region], **kwargs) -> "SpeechConfig":
        return cls(region=region, subscription_key=subscription_key, **kwargs)

    @classmethod
    def from_authorization_token(cls, token: str, region: Union[str, Region], **kwargs) -> "SpeechConfig":
        return cls(region=region, authorization_token=token, **kwargs)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "SpeechConfig":
        """Build a config from ``AZURE_SPEECH_*`` environment variables.

        Keyword overrides that are not None take precedence over the environment.
        """
        env = os.environ if environ is None else environ
        values = {
            "region": env.get("AZURE_SPEECH_REGION"),
            "subscription_key": env.get("AZURE_SPEECH_KEY"),
            "authorization_token": env.get("AZURE_SPEECH_TOKEN"),
            "endpoint": env.get("AZURE_SPEECH_ENDPOINT"),
            "voice_name": env.get("AZURE_SPEECH_VOICE"),
            "output_format": env.get("AZURE_SPEECH_OUTPUT_FORMAT"),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        if not values.get("region"):
            raise ValidationError("AZURE_SPEECH_REGION is not set.")
        return cls(**{key: value for key, value in values.items() if value})

    @property
    def _token_base(self) -> str:
        if self.token_endpoint:
            return self.token_endpoint.rstrip("/")
        return f"https://{self.region.value}.api.cognitive.microsoft.com"

    @property
    def _tts_base(self) -> str:
        if self.endpoint:
            return self.endpoint.rstrip("/")
        return f"https://{self.region.value}.tts.speech.microsoft.com"

    @property
    def token_url(self) -> str:
        return f"{self._token_base}/sts/v1.0/issueToken"

    @property
    def voices_url(self) -> str:
        return f"{self._tts_base}/cognitiveservices/voices/list"

    @property
    def tts_url(self) -> str:
        return f"{self._tts_base}/cognitiveservices/v1"

    def validate(self) -> None:
        if not (self.subscription_key or self.authorization_token):
            raise ValidationError("Either subscription_key or authorization_token must be provided.")
