import logging
from typing import List, Optional

from krishi_mitra.models.advisory import AdviceContext, NluResult, PreviousQuery
from krishi_mitra.models.farmer import FarmerProfile
from krishi_mitra.models.learning import QueryRecord
from krishi_mitra.services.collaborator_guard import guarded_call
from krishi_mitra.services.knowledge_base import KnowledgeBase
from krishi_mitra.services.weather_service import WeatherProvider

logger = logging.getLogger(__name__)


def season_for_month(month: int) -> str:
    if 6 <= month <= 9:
        return "monsoon"
    if month >= 10 or month <= 2:
        return "post-monsoon"
    return "pre-monsoon"


def _first(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None


def summarize_history(history: List[QueryRecord], limit: int) -> List[PreviousQuery]:
    recent = history[-limit:] if limit > 0 else []
    return [
        PreviousQuery(
            id=record.id,
            ts=record.ts,
            text=record.query.text,
            crop=record.query.crop,
            confidence=record.response.confidence,
        )
        for record in recent
    ]


async def build_context(
    *,
    crop: Optional[str],
    location: Optional[str],
    season: Optional[str],
    nlu: Optional[NluResult],
    profile: Optional[FarmerProfile],
    history: List[QueryRecord],
    month: int,
    knowledge_base: KnowledgeBase,
    weather_provider: WeatherProvider,
    history_limit: int,
    timeout: float,
) -> AdviceContext:
    """
    Merges explicit fields, NLU entities and the stored profile into one
    context. Per field the first available wins: explicit value, NLU entity,
    profile value, computed default.
    """
    entities = nlu.entities if nlu is not None and nlu.error is None else None
    profile_crop = profile.crops[-1] if profile is not None and profile.crops else None

    resolved_crop = _first(crop, entities.crop if entities else None, profile_crop)
    resolved_location = _first(
        location,
        entities.location if entities else None,
        profile.location if profile is not None else None,
    )
    resolved_season = _first(
        season, entities.season if entities else None
    ) or season_for_month(month)

    weather = await guarded_call(
        "Weather lookup",
        weather_provider.current_conditions(resolved_location),
        timeout,
    )
    if weather is None:
        logger.info("No weather available for location %r", resolved_location)

    return AdviceContext(
        location=resolved_location,
        crop=resolved_crop,
        season=resolved_season,
        previous_queries=summarize_history(history, history_limit),
        weather=weather,
        crop_calendar=knowledge_base.crop_calendar(resolved_crop),
    )
