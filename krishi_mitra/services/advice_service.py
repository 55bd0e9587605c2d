from typing import List, Optional

from krishi_mitra.models.advisory import (
    AdviceContext,
    AdviceResult,
    ImageAnalysisResult,
    Intent,
    NluResult,
    Severity,
)
from krishi_mitra.services.escalation_service import needs_escalation
from krishi_mitra.services.knowledge_base import KnowledgeBase

INSUFFICIENT_INPUT_CONFIDENCE = 0.3
URGENCY_NOTICE = "This is a serious condition requiring immediate attention."
MORE_INFORMATION_PROMPT = (
    "I need more information to help you better. "
    "Could you describe your problem or upload a photo?"
)


def disease_advice(
    image: ImageAnalysisResult, context: AdviceContext, knowledge_base: KnowledgeBase
) -> str:
    treatment = knowledge_base.treatment_for(context.crop, image.disease)
    if treatment is None:
        return (
            f"Detected {image.disease}. General recommendation: Consult with your "
            "local agricultural officer for crop-specific treatment."
        )

    parts = [f"Detected {image.disease} in your {context.crop}."]
    if image.severity == Severity.HIGH:
        parts.append(URGENCY_NOTICE)
    parts.append(f"Recommended treatment: {treatment}.")
    parts.append("Apply during early morning or late evening.")
    parts.append("Ensure proper coverage of affected areas.")
    if context.season:
        parts.append(
            f"Since it's {context.season}, also ensure proper drainage "
            "and avoid overhead irrigation."
        )
    return " ".join(parts)


def intent_advice(
    intent: Intent, context: AdviceContext, knowledge_base: KnowledgeBase
) -> str:
    crop = context.crop or "your crop"
    location = context.location or "your area"

    if intent == Intent.DISEASE_DIAGNOSIS:
        return (
            f"For {crop} disease issues in {location}, I recommend uploading a "
            "clear photo of the affected plant parts for accurate diagnosis."
        )
    if intent == Intent.PEST_CONTROL:
        info = knowledge_base.get_crop(context.crop)
        if info is not None:
            return (
                f"Common pests in {crop}: {', '.join(info.pests)}. Use IPM approach - "
                "neem oil spray, yellow sticky traps, and biological control agents."
            )
        return (
            f"For pest control in {crop}, use integrated pest management. "
            "Upload photos for specific identification."
        )
    if intent == Intent.FERTILIZER_ADVICE:
        return (
            f"For {crop} in {context.season or 'current season'}, use balanced NPK "
            "fertilizer. Soil testing recommended for precise nutrient management."
        )
    if intent == Intent.SCHEME_INFO:
        names = ", ".join(
            scheme.name for scheme in knowledge_base.get_schemes(context.location)
        )
        return (
            f"Available schemes: {names}. "
            "Contact your local Krishi Bhavan for applications."
        )
    return (
        f"I understand you're asking about {crop}. Please provide more specific "
        "details or upload photos for better assistance."
    )


def contextual_recommendations(context: AdviceContext) -> List[str]:
    recommendations = []
    if context.weather is not None and context.weather.condition == "rainy":
        recommendations.append(
            "Heavy rains expected - ensure proper drainage to prevent fungal diseases"
        )
    if context.season == "monsoon":
        recommendations.append(
            "Monsoon season - increase surveillance for disease outbreaks"
        )
    if context.crop_calendar is not None and context.crop_calendar.next_activity:
        recommendations.append(f"Upcoming: {context.crop_calendar.next_activity}")
    return recommendations


def generate_advice(
    nlu: Optional[NluResult],
    image: Optional[ImageAnalysisResult],
    context: AdviceContext,
    knowledge_base: KnowledgeBase,
) -> AdviceResult:
    if image is not None and image.has_finding:
        advice = disease_advice(image, context, knowledge_base)
        confidence = image.confidence
    elif nlu is not None and nlu.intent is not None:
        advice = intent_advice(nlu.intent, context, knowledge_base)
        confidence = nlu.confidence
    else:
        advice = MORE_INFORMATION_PROMPT
        confidence = INSUFFICIENT_INPUT_CONFIDENCE

    confidence = min(max(confidence, 0.0), 1.0)
    return AdviceResult(
        main_advice=advice,
        recommendations=contextual_recommendations(context),
        confidence=confidence,
        should_escalate=needs_escalation(confidence),
        context=context,
    )
