"""Voice descriptors returned by the voices/list endpoint."""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .errors import VoiceNotFoundError

DEFAULT_LOCALE = "en-US"
DEFAULT_GENDER = "Female"


@dataclass(frozen=True)
class Voice:
    """One selectable synthetic voice.

    Only ``short_name``, ``locale`` and ``gender`` are used to build requests;
    the provider record is kept unmodified in ``raw``.
    """

    short_name: str
    locale: str = DEFAULT_LOCALE
    gender: str = DEFAULT_GENDER
    display_name: Optional[str] = None
    name: Optional[str] = None
    local_name: Optional[str] = None
    voice_type: Optional[str] = None
    sample_rate_hz: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "Voice":
        sample_rate = record.get("SampleRateHertz")
        return cls(
            short_name=record.get("ShortName") or "",
            locale=record.get("Locale") or DEFAULT_LOCALE,
            gender=record.get("Gender") or DEFAULT_GENDER,
            display_name=record.get("DisplayName"),
            name=record.get("Name"),
            local_name=record.get("LocalName"),
            voice_type=record.get("VoiceType"),
            sample_rate_hz=int(sample_rate) if sample_rate else None,
            raw=dict(record),
        )

    @classmethod
    def known(cls, short_name: str) -> "Voice":
        """Look up ``short_name`` in KNOWN_VOICES without calling the service."""
        return resolve_voice(KNOWN_VOICES, short_name)


def parse_voices(payload: Any) -> List[Voice]:
    if not isinstance(payload, list):
        return []
    return [Voice.from_dict(item) for item in payload if isinstance(item, dict)]


def resolve_voice(voices: Iterable[Voice], name: str) -> Voice:
    """Find ``name`` among ``voices`` by short name.

    Exact matches win over case-insensitive ones.
    """
    candidates = list(voices)
    for voice in candidates:
        if voice.short_name == name:
            return voice
    folded = name.casefold()
    for voice in candidates:
        if voice.short_name.casefold() == folded:
            return voice
    raise VoiceNotFoundError(name, available=[voice.short_name for voice in candidates])


def filter_by_locale(voices: Iterable[Voice], locale: str) -> List[Voice]:
    folded = locale.casefold()
    return [
        voice for voice in voices
        if voice.locale.casefold() == folded or voice.locale.casefold().startswith(folded + "-")
    ]


# Voices usable without a voice list lookup: (short name, locale, gender).
_KNOWN_VOICE_TABLE = (
    ("en-US-JennyNeural", "en-US", "Female"),
    ("en-US-AriaNeural", "en-US", "Female"),
    ("en-US-AvaNeural", "en-US", "Female"),
    ("en-US-GuyNeural", "en-US", "Male"),
    ("en-US-DavisNeural", "en-US", "Male"),
    ("en-US-AndrewNeural", "en-US", "Male"),
    ("en-GB-SoniaNeural", "en-GB", "Female"),
    ("en-GB-RyanNeural", "en-GB", "Male"),
    ("en-AU-NatashaNeural", "en-AU", "Female"),
    ("en-AU-WilliamNeural", "en-AU", "Male"),
    ("en-IE-EmilyNeural", "en-IE", "Female"),
    ("de-DE-KatjaNeural", "de-DE", "Female"),
    ("de-DE-ConradNeural", "de-DE", "Male"),
    ("fr-FR-DeniseNeural", "fr-FR", "Female"),
    ("fr-FR-HenriNeural", "fr-FR", "Male"),
    ("es-ES-ElviraNeural", "es-ES", "Female"),
    ("es-ES-AlvaroNeural", "es-ES", "Male"),
    ("it-IT-ElsaNeural", "it-IT", "Female"),
    ("it-IT-DiegoNeural", "it-IT", "Male"),
    ("nl-NL-ColetteNeural", "nl-NL", "Female"),
    ("nl-NL-MaartenNeural", "nl-NL", "Male"),
    ("pt-BR-FranciscaNeural", "pt-BR", "Female"),
    ("pt-BR-AntonioNeural", "pt-BR", "Male"),
    ("ja-JP-NanamiNeural", "ja-JP", "Female"),
    ("ja-JP-KeitaNeural", "ja-JP", "Male"),
    ("zh-CN-XiaoxiaoNeural", "zh-CN", "Female"),
    ("zh-CN-YunxiNeural", "zh-CN", "Male"),
    ("ko-KR-SunHiNeural", "ko-KR", "Female"),
    ("hr-HR-GabrijelaNeural", "hr-HR", "Female"),
    ("hr-HR-SreckoNeural", "hr-HR", "Male"),
)

KNOWN_VOICES = tuple(
    Voice(short_name=short_name, locale=locale, gender=gender)
    for short_name, locale, gender in _KNOWN_VOICE_TABLE
)
