from typing import Protocol

from krishi_mitra.models.advisory import VoiceTranscription


class SpeechRecognizer(Protocol):
    async def transcribe(self, audio_ref: str) -> VoiceTranscription: ...


class StaticSpeechRecognizer:
    """Returns the same Malayalam voice note for every recording."""

    def __init__(
        self,
        text: str = "വാഴയിൽ പുള്ളി രോഗം വന്നിട്ടുണ്ട്, എന്ത് മരുന്ന് ഉപയോഗിക്കണം?",
        language: str = "ml",
        confidence: float = 0.87,
    ) -> None:
        self.result = VoiceTranscription(
            text=text, language=language, confidence=confidence
        )

    async def transcribe(self, audio_ref: str) -> VoiceTranscription:
        return self.result
