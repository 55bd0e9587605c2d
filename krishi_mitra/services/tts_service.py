from typing import List, Protocol

from krishi_mitra.models.query import TextToSpeechResponse


class TextToSpeech(Protocol):
    async def synthesize(self, text: str, language: str) -> TextToSpeechResponse: ...


class UnavailableTextToSpeech:
    def __init__(self, supported_languages: List[str]) -> None:
        self.supported_languages = list(supported_languages)

    async def synthesize(self, text: str, language: str) -> TextToSpeechResponse:
        return TextToSpeechResponse(
            audio_url=None,
            message="TTS service will be available soon",
            supported_languages=self.supported_languages,
        )
