from typing import Optional
from xml.sax.saxutils import escape

from .voices import Voice

MSTTS_NAMESPACE = "https://www.w3.org/2001/mstts"

_ATTRIBUTE_ENTITIES = {"'": "&apos;", '"': "&quot;"}


def _attr(value: str) -> str:
    return escape(value, _ATTRIBUTE_ENTITIES)


def build_ssml(
    text: str,
    *,
    voice: Voice,
    style: Optional[str] = None,
    rate: Optional[str] = None,
    pitch: Optional[str] = None,
) -> str:
    """Create a minimal SSML document for text-to-speech."""
    body = escape(text)
    prosody_attrs = []
    if rate:
        prosody_attrs.append(f"rate='{_attr(rate)}'")
    if pitch:
        prosody_attrs.append(f"pitch='{_attr(pitch)}'")
    if prosody_attrs:
        body = f"<prosody {' '.join(prosody_attrs)}>{body}</prosody>"
    namespace = ""
    if style:
        namespace = f" xmlns:mstts='{MSTTS_NAMESPACE}'"
        body = f"<mstts:express-as style='{_attr(style)}'>{body}</mstts:express-as>"
    lang = _attr(voice.locale)
    return (
        f"<speak version='1.0' xml:lang='{lang}'{namespace}>"
        f"<voice xml:lang='{lang}' xml:gender='{_attr(voice.gender)}' name='{_attr(voice.short_name)}'>"
        f"{body}"
        "</voice>"
        "</speak>"
    )
