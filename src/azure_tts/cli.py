"""Command-line interface for azure-tts.

Commands:
- `token`: print a fresh bearer token.
- `voices`: list the voices of a region.
- `speak`: synthesize text into an audio file.
"""
import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, Iterator, Optional

import httpx
import typer

from .client import SpeechClient
from .config import OutputFormat, SpeechConfig
from .errors import SpeechServiceError, ValidationError
from .voices import Voice, filter_by_locale

app = typer.Typer(
    name="azure-tts",
    no_args_is_help=True,
    help="Azure text-to-speech from the command line.",
)


def _make_client(config: SpeechConfig) -> SpeechClient:
    return SpeechClient(config)


@contextmanager
def _command_errors() -> Iterator[None]:
    """Map library errors to exit codes: 2 for bad input, 1 for failed calls."""
    try:
        yield
    except ValidationError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    except SpeechServiceError as exc:
        typer.echo(f"error: speech service rejected the request ({exc})", err=True)
        raise typer.Exit(code=1) from exc
    except httpx.HTTPError as exc:
        typer.echo(f"error: request failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _open_client(ctx: typer.Context) -> SpeechClient:
    options = ctx.obj or {}
    if not options.get("region"):
        raise ValidationError("Region is required (--region or AZURE_SPEECH_REGION).")
    config = SpeechConfig(
        region=options["region"],
        subscription_key=options.get("key"),
        authorization_token=options.get("token"),
    )
    return _make_client(config)


def _authorize(client: SpeechClient) -> None:
    # A key always wins over a pre-issued token so the token is fresh.
    if client.config.subscription_key:
        client.issue_token()


@app.callback()
def main(
    ctx: typer.Context,
    region: Annotated[
        Optional[str],
        typer.Option("--region", "-r", envvar="AZURE_SPEECH_REGION", help="Azure region, e.g. westeurope."),
    ] = None,
    key: Annotated[
        Optional[str],
        typer.Option("--key", envvar="AZURE_SPEECH_KEY", help="Speech resource key.", show_default=False),
    ] = None,
    token: Annotated[
        Optional[str],
        typer.Option("--token", envvar="AZURE_SPEECH_TOKEN", help="Pre-issued bearer token.", show_default=False),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log HTTP traffic.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    ctx.obj = {"region": region, "key": key, "token": token}


@app.command("token")
def token_command(ctx: typer.Context) -> None:
    """Exchange the subscription key for a bearer token and print it."""
    with _command_errors():
        with _open_client(ctx) as client:
            issued = client.issue_token()
    typer.echo(issued.value)


@app.command("voices")
def voices_command(
    ctx: typer.Context,
    locale: Annotated[Optional[str], typer.Option("--locale", "-l", help="Only voices for this locale.")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the provider records as JSON.")] = False,
) -> None:
    """List the voices available in the region."""
    with _command_errors():
        with _open_client(ctx) as client:
            _authorize(client)
            voices = client.list_voices()
    if locale:
        voices = filter_by_locale(voices, locale)
    if as_json:
        typer.echo(json.dumps([voice.raw for voice in voices], indent=2, ensure_ascii=False))
        return
    for voice in voices:
        typer.echo(f"{voice.short_name:<40} {voice.locale:<8} {voice.gender}")


@app.command("speak")
def speak_command(
    ctx: typer.Context,
    text: Annotated[str, typer.Argument(help="Text to speak.")],
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Audio file to write (overwritten). Default: speech.<ext> for the format."),
    ] = None,
    voice: Annotated[Optional[str], typer.Option("--voice", help="Voice short name.")] = None,
    output_format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Audio encoding, e.g. audio-24khz-48kbitrate-mono-mp3."),
    ] = None,
    lookup: Annotated[
        bool,
        typer.Option("--lookup/--no-lookup", help="Validate the voice against the voice list, or only against the built-in voices."),
    ] = True,
) -> None:
    """Synthesize TEXT into an audio file."""
    with _command_errors():
        with _open_client(ctx) as client:
            _authorize(client)
            name = voice or client.config.voice_name
            fmt = OutputFormat.parse(output_format) if output_format else client.config.output_format
            target = out if out is not None else Path(f"speech{fmt.extension}")
            selected = client.get_voice(name) if lookup else Voice.known(name)
            result = client.synthesize_to_file(text, target, selected, output_format=fmt)
    typer.echo(f"Wrote {len(result.audio)} bytes ({result.format.value}) to {result.path}")


if __name__ == "__main__":
    app()
