import pytest


@pytest.fixture
def voice_records():
    return [
        {
            "Name": "Microsoft Server Speech Text to Speech Voice (en-GB, SoniaNeural)",
            "DisplayName": "Sonia",
            "LocalName": "Sonia",
            "ShortName": "en-GB-SoniaNeural",
            "Gender": "Female",
            "Locale": "en-GB",
            "SampleRateHertz": "48000",
            "VoiceType": "Neural",
        },
        {
            "Name": "Microsoft Server Speech Text to Speech Voice (de-DE, ConradNeural)",
            "DisplayName": "Conrad",
            "LocalName": "Conrad",
            "ShortName": "de-DE-ConradNeural",
            "Gender": "Male",
            "Locale": "de-DE",
            "SampleRateHertz": "48000",
            "VoiceType": "Neural",
        },
    ]
