"""
Entity extraction and intent classification over farmer text.

Both steps are plain lexical matching on the lower-cased text. Entity slots
hold a single value each: when several vocabulary terms occur, the last term
in vocabulary order wins. Intents are tested in the order of
``INTENT_PATTERNS`` and the first one with a matching trigger is returned.
"""

import logging
from functools import reduce
from typing import List, Optional, Sequence, Tuple

from krishi_mitra.models.advisory import Intent, NluEntities, NluResult
from krishi_mitra.services.collaborator_guard import guarded_call
from krishi_mitra.services.translation_service import Translator

logger = logging.getLogger(__name__)

NLU_CONFIDENCE = 0.85

CROP_TERMS = ["banana", "rice", "tomato", "coconut", "pepper", "cardamom"]
DISEASE_TERMS = ["spot", "blight", "wilt", "rot", "disease", "infection"]
PEST_TERMS = ["aphid", "borer", "thrips", "nematode", "pest", "insect"]

INTENT_PATTERNS: List[Tuple[Intent, Sequence[str]]] = [
    (Intent.DISEASE_DIAGNOSIS, ("disease", "problem", "infected", "spots", "yellowing")),
    (Intent.PEST_CONTROL, ("pest", "insect", "eating", "holes", "damage")),
    (Intent.FERTILIZER_ADVICE, ("fertilizer", "nutrient", "growth", "yield")),
    (Intent.WEATHER_QUERY, ("weather", "rain", "temperature", "climate")),
    (Intent.SCHEME_INFO, ("scheme", "subsidy", "loan", "government", "support")),
]


def last_match(text: str, vocabulary: Sequence[str]) -> Optional[str]:
    return reduce(
        lambda found, term: term if term in text else found, vocabulary, None
    )


def extract_entities(text: str) -> NluEntities:
    normalized = text.lower()
    return NluEntities(
        crop=last_match(normalized, CROP_TERMS),
        disease=last_match(normalized, DISEASE_TERMS),
        pest=last_match(normalized, PEST_TERMS),
    )


def classify_intent(text: str) -> Intent:
    normalized = text.lower()
    for intent, triggers in INTENT_PATTERNS:
        if any(trigger in normalized for trigger in triggers):
            return intent
    return Intent.GENERAL_QUERY


async def understand(
    text: str,
    language: str,
    translator: Translator,
    timeout: float,
) -> NluResult:
    """
    Runs translation (Malayalam only), entity extraction and intent
    classification. Never raises: a failure yields a result with ``error``
    set and neither entities nor intent.
    """
    try:
        translated_text = None
        working_text = text
        if language == "ml":
            translated = await guarded_call(
                "Translation", translator.translate(text, language), timeout
            )
            if translated is not None:
                translated_text = translated
                working_text = translated

        return NluResult(
            original_text=text,
            translated_text=translated_text,
            entities=extract_entities(working_text),
            intent=classify_intent(working_text),
            confidence=NLU_CONFIDENCE,
        )
    except Exception as e:
        logger.exception("Could not process natural language input")
        return NluResult(original_text=text, error=str(e))
