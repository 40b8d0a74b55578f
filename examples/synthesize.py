"""
Example: issue a token, pick a voice from the voice list, write an mp3.

Environment variables:
- AZURE_SPEECH_KEY
- AZURE_SPEECH_REGION (e.g., westeurope)
- AZURE_SPEECH_VOICE (optional, e.g., en-GB-SoniaNeural)
"""
import os

from azure_tts import OutputFormat, SpeechClient, SpeechConfig


def main() -> None:
    key = os.environ.get("AZURE_SPEECH_KEY")
    if not key:
        raise SystemExit("Set AZURE_SPEECH_KEY.")
    config = SpeechConfig.from_subscription(key, region=os.environ.get("AZURE_SPEECH_REGION", "westeurope"))

    with SpeechClient(config) as client:
        token = client.issue_token()
        voice = client.get_voice(os.environ.get("AZURE_SPEECH_VOICE", config.voice_name), token=token)
        result = client.synthesize_to_file(
            "Hi, this is a test.",
            "output.mp3",
            voice,
            token=token,
            output_format=OutputFormat.AUDIO_24KHZ_48KBITRATE_MONO_MP3,
        )
    print(f"Wrote {len(result.audio)} bytes with {voice.short_name} to {result.path}")


if __name__ == "__main__":
    main()
