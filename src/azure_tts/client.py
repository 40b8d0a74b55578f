import asyncio
import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import httpx

from ._version import __version__
from .auth import Token, TokenStore
from .config import OutputFormat, SpeechConfig
from .errors import SpeechServiceError, ValidationError
from .files import atomic_write_bytes
from .ssml import build_ssml
from .voices import Voice, parse_voices, resolve_voice

log = logging.getLogger(__name__)

USER_AGENT = f"azure-tts/{__version__}"

TokenLike = Union[Token, str]
VoiceLike = Union[Voice, str]


@dataclass
class SpeechSynthesisResult:
    audio: bytes
    request_id: Optional[str]
    format: OutputFormat
    ssml: str
    path: Optional[Path] = None


class SpeechClient:
    """Thin wrapper around the Azure token, voice list and text-to-speech REST APIs.

    Every public operation issues exactly one HTTP request. Bearer tokens can
    be passed explicitly to each call; when omitted, the token most recently
    issued by :meth:`issue_token` for the configured region is used.
    """

    def __init__(
        self,
        config: SpeechConfig,
        *,
        timeout: Optional[float] = None,
        token_store: Optional[TokenStore] = None,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        config.validate()
        self.config = config
        self.tokens = token_store if token_store is not None else TokenStore()
        timeout = config.timeout if timeout is None else timeout
        headers = {"User-Agent": USER_AGENT}
        self._client = httpx.Client(timeout=timeout, transport=transport, headers=headers)
        self._async_client = httpx.AsyncClient(timeout=timeout, transport=async_transport, headers=headers)

    def close(self) -> None:
        self._client.close()
        if self._async_client.is_closed:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._async_client.aclose())
        # Inside a running loop, callers are expected to await aclose().

    def __enter__(self) -> "SpeechClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    async def __aenter__(self) -> "SpeechClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
        self._client.close()

    async def aclose(self) -> None:
        if not self._async_client.is_closed:
            await self._async_client.aclose()

    # Token acquisition

    def issue_token(self, *, store: bool = True) -> Token:
        """Exchange the subscription key for a bearer token.

        The new token becomes the current one unless ``store`` is false.
        A failed request leaves the current token in place.
        """
        headers = self._key_headers()
        issued_at = datetime.now(timezone.utc)
        log.debug("POST %s", self.config.token_url)
        response = self._client.post(self.config.token_url, headers=headers, content=b"")
        return self._accept_token(response, issued_at, store)

    async def issue_token_async(self, *, store: bool = True) -> Token:
        """Async: exchange the subscription key for a bearer token."""
        headers = self._key_headers()
        issued_at = datetime.now(timezone.utc)
        log.debug("POST %s", self.config.token_url)
        response = await self._async_client.post(self.config.token_url, headers=headers, content=b"")
        return self._accept_token(response, issued_at, store)

    def set_authorization_token(self, token: TokenLike) -> Token:
        """Make ``token`` the current token, e.g. one obtained elsewhere."""
        token = self._as_token(token)
        self.tokens.set(token)
        return token

    # Voice listing

    def list_voices(self, token: Optional[TokenLike] = None) -> List[Voice]:
        """Return the voices available in the configured region."""
        headers = self._bearer_headers(token)
        log.debug("GET %s", self.config.voices_url)
        response = self._client.get(self.config.voices_url, headers=headers)
        return self._accept_voices(response)

    async def list_voices_async(self, token: Optional[TokenLike] = None) -> List[Voice]:
        """Async: return the voices available in the configured region."""
        headers = self._bearer_headers(token)
        log.debug("GET %s", self.config.voices_url)
        response = await self._async_client.get(self.config.voices_url, headers=headers)
        return self._accept_voices(response)

    def get_voice(self, name: str, token: Optional[TokenLike] = None) -> Voice:
        """List voices and return the one whose short name is ``name``."""
        return resolve_voice(self.list_voices(token), name)

    async def get_voice_async(self, name: str, token: Optional[TokenLike] = None) -> Voice:
        return resolve_voice(await self.list_voices_async(token), name)

    # Synthesis

    def synthesize(
        self,
        text: str,
        voice: Optional[VoiceLike] = None,
        *,
        output_format: Optional[Union[str, OutputFormat]] = None,
        token: Optional[TokenLike] = None,
        style: Optional[str] = None,
        rate: Optional[str] = None,
        pitch: Optional[str] = None,
    ) -> SpeechSynthesisResult:
        """Convert text to audio bytes.

        A ``Voice`` is used as given. A plain name must be one of
        ``KNOWN_VOICES``; resolve other names with :meth:`get_voice` first.
        """
        ssml, fmt = self._prepare_synthesis(text, voice, output_format, style, rate, pitch)
        headers = self._synthesis_headers(token, fmt)
        log.debug("POST %s (%s)", self.config.tts_url, fmt.value)
        response = self._client.post(self.config.tts_url, headers=headers, content=ssml.encode("utf-8"))
        return self._accept_audio(response, ssml, fmt)

    async def synthesize_async(
        self,
        text: str,
        voice: Optional[VoiceLike] = None,
        *,
        output_format: Optional[Union[str, OutputFormat]] = None,
        token: Optional[TokenLike] = None,
        style: Optional[str] = None,
        rate: Optional[str] = None,
        pitch: Optional[str] = None,
    ) -> SpeechSynthesisResult:
        """Async: convert text to audio bytes."""
        ssml, fmt = self._prepare_synthesis(text, voice, output_format, style, rate, pitch)
        headers = self._synthesis_headers(token, fmt)
        log.debug("POST %s (%s)", self.config.tts_url, fmt.value)
        response = await self._async_client.post(
            self.config.tts_url, headers=headers, content=ssml.encode("utf-8")
        )
        return self._accept_audio(response, ssml, fmt)

    def synthesize_to_file(
        self,
        text: str,
        output_path: Union[str, Path],
        voice: Optional[VoiceLike] = None,
        **kwargs,
    ) -> SpeechSynthesisResult:
        """Synthesize ``text`` and write the audio to ``output_path``.

        The file is replaced only after the whole response has arrived, so a
        failed call never leaves a partial or truncated file behind.
        """
        target = self._require_path(output_path)
        result = self.synthesize(text, voice, **kwargs)
        return dataclasses.replace(result, path=atomic_write_bytes(target, result.audio))

    async def synthesize_to_file_async(
        self,
        text: str,
        output_path: Union[str, Path],
        voice: Optional[VoiceLike] = None,
        **kwargs,
    ) -> SpeechSynthesisResult:
        target = self._require_path(output_path)
        result = await self.synthesize_async(text, voice, **kwargs)
        return dataclasses.replace(result, path=atomic_write_bytes(target, result.audio))

    # Helpers

    def _key_headers(self) -> Dict[str, str]:
        if not self.config.subscription_key:
            raise ValidationError("A subscription key is required to issue tokens.")
        return {"Ocp-Apim-Subscription-Key": self.config.subscription_key}

    def _as_token(self, token: TokenLike) -> Token:
        if isinstance(token, Token):
            if token.region is not self.config.region:
                raise ValidationError(
                    f"Token was issued for {token.region.value}, not {self.config.region.value}."
                )
            return token
        if not token:
            raise ValidationError("Authorization token must not be empty.")
        return Token(value=token, issued_at=datetime.now(timezone.utc), region=self.config.region)

    def _resolve_token(self, token: Optional[TokenLike]) -> Token:
        if token:
            return self._as_token(token)
        current = self.tokens.get_for(self.config.region)
        if current is not None:
            return current
        if self.config.authorization_token:
            return self._as_token(self.config.authorization_token)
        raise ValidationError("No authorization token: call issue_token() or pass token=.")

    def _bearer_headers(self, token: Optional[TokenLike]) -> Dict[str, str]:
        return {"Authorization": self._resolve_token(token).authorization_header}

    def _synthesis_headers(self, token: Optional[TokenLike], fmt: OutputFormat) -> Dict[str, str]:
        headers = self._bearer_headers(token)
        headers.update(
            {
                "Content-Type": "application/ssml+xml",
                "X-Microsoft-OutputFormat": fmt.value,
            }
        )
        return headers

    def _prepare_synthesis(
        self,
        text: str,
        voice: Optional[VoiceLike],
        output_format: Optional[Union[str, OutputFormat]],
        style: Optional[str],
        rate: Optional[str],
        pitch: Optional[str],
    ) -> Tuple[str, OutputFormat]:
        if not text or not text.strip():
            raise ValidationError("Text to synthesize must not be empty.")
        fmt = OutputFormat.parse(output_format) if output_format is not None else self.config.output_format
        if voice is None:
            voice = self.config.voice_name
        if isinstance(voice, str):
            if not voice.strip():
                raise ValidationError("Voice name must not be empty.")
            voice = Voice.known(voice.strip())
        ssml = build_ssml(text, voice=voice, style=style, rate=rate, pitch=pitch)
        return ssml, fmt

    @staticmethod
    def _require_path(output_path: Union[str, Path, None]) -> Path:
        if output_path is None or not str(output_path).strip():
            raise ValidationError("An output path is required.")
        return Path(output_path)

    def _accept_token(self, response: httpx.Response, issued_at: datetime, store: bool) -> Token:
        self._raise_for_status(response)
        value = response.text.strip()
        if not value:
            raise SpeechServiceError(
                "Token service returned an empty token.",
                status_code=response.status_code,
            )
        token = Token(value=value, issued_at=issued_at, region=self.config.region)
        if store:
            self.tokens.set(token)
        log.info("Issued token for region %s", self.config.region.value)
        return token

    def _accept_voices(self, response: httpx.Response) -> List[Voice]:
        self._raise_for_status(response)
        try:
            payload = response.json()
        except ValueError as exc:
            raise SpeechServiceError(
                "Voice list response is not valid JSON.",
                status_code=response.status_code,
                body=response.text,
            ) from exc
        voices = parse_voices(payload)
        log.debug("Voice list returned %d voices", len(voices))
        return voices

    def _accept_audio(self, response: httpx.Response, ssml: str, fmt: OutputFormat) -> SpeechSynthesisResult:
        self._raise_for_status(response)
        request_id = response.headers.get("X-RequestId")
        if not response.content:
            raise SpeechServiceError(
                "Synthesis returned no audio.",
                status_code=response.status_code,
                request_id=request_id,
            )
        log.debug("Received %d bytes of %s audio", len(response.content), fmt.value)
        return SpeechSynthesisResult(audio=response.content, request_id=request_id, format=fmt, ssml=ssml)

    def _raise_for_status(self, response: httpx.Response) -> None:
        log.debug("%s %s -> %d", response.request.method, response.request.url, response.status_code)
        if response.is_success:
            return
        body = response.text
        message = body or response.reason_phrase
        details: Dict = {}
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            details = payload
            error = payload.get("error")
            message = (
                (error.get("message") if isinstance(error, dict) else None)
                or payload.get("message")
                or payload.get("statusText")
                or message
            )
        raise SpeechServiceError(
            message=message,
            status_code=response.status_code,
            details=details,
            body=body,
            request_id=response.headers.get("X-RequestId"),
        )
