"""
Lightweight client for the Azure text-to-speech REST API.

Issue a bearer token from a subscription key, list the voices of a region,
and synthesize text into an audio file:

    client = SpeechClient(SpeechConfig.from_subscription(key, region="westeurope"))
    token = client.issue_token()
    voice = client.get_voice("en-GB-SoniaNeural", token=token)
    client.synthesize_to_file("Hi, this is a test.", "out.mp3", voice, token=token)
"""
from ._version import __version__
from .auth import TOKEN_TTL, Token, TokenStore
from .client import SpeechClient, SpeechSynthesisResult
from .config import DEFAULT_OUTPUT_FORMAT, OutputFormat, Region, SpeechConfig
from .errors import AzureTTSError, SpeechServiceError, ValidationError, VoiceNotFoundError
from .ssml import build_ssml
from .voices import KNOWN_VOICES, Voice, resolve_voice

__all__ = [
    "AzureTTSError",
    "DEFAULT_OUTPUT_FORMAT",
    "KNOWN_VOICES",
    "OutputFormat",
    "Region",
    "SpeechClient",
    "SpeechConfig",
    "SpeechServiceError",
    "SpeechSynthesisResult",
    "TOKEN_TTL",
    "Token",
    "TokenStore",
    "ValidationError",
    "Voice",
    "VoiceNotFoundError",
    "__version__",
    "build_ssml",
    "resolve_voice",
]
