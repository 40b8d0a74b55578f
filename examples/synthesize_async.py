"""
Example: async text-to-speech with a pre-issued bearer token.

Environment variables:
- AZURE_SPEECH_TOKEN (bearer token, valid for 10 minutes)
- AZURE_SPEECH_REGION (e.g., westeurope)
"""
import asyncio
import os

from azure_tts import SpeechClient, SpeechConfig


async def main() -> None:
    token = os.environ.get("AZURE_SPEECH_TOKEN")
    if not token:
        raise SystemExit("Set AZURE_SPEECH_TOKEN.")
    config = SpeechConfig.from_authorization_token(token, region=os.environ.get("AZURE_SPEECH_REGION", "westeurope"))

    async with SpeechClient(config) as client:
        voices = await client.list_voices_async()
        print(f"{len(voices)} voices available in {config.region}")
        result = await client.synthesize_to_file_async("Hello from the async client!", "output_async.mp3")
    print(f"Wrote synthesized audio to {result.path}")


if __name__ == "__main__":
    asyncio.run(main())
