from typing import Mapping, Protocol

# Malayalam -> English phrase table. Both the virama and chillu spellings of
# "on the banana leaf" occur in farmer input.
MALAYALAM_PHRASES = {
    "വാഴയില് പുള്ളി": "banana leaf spot",
    "വാഴയിൽ പുള്ളി": "banana leaf spot",
    "രോഗം": "disease",
    "കീടം": "pest",
    "മരുന്ന്": "medicine",
    "എന്ത് ചെയ്യണം": "what to do",
}


class Translator(Protocol):
    async def translate(self, text: str, source_language: str) -> str: ...


class PhraseTableTranslator:
    """Exact-phrase substitution; text without known phrases passes through."""

    def __init__(self, phrases: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self.phrases = phrases if phrases is not None else {"ml": MALAYALAM_PHRASES}

    async def translate(self, text: str, source_language: str) -> str:
        for phrase, english in self.phrases.get(source_language, {}).items():
            text = text.replace(phrase, english)
        return text
