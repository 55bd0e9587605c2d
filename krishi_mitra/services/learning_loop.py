import logging
from collections import Counter
from typing import Iterable, List, Optional

from krishi_mitra.collections.escalation import get_escalations
from krishi_mitra.collections.farmer_profile import (
    get_farmer_profile_from_id,
    get_farmer_profiles,
    save_farmer_profile,
)
from krishi_mitra.collections.query_record import (
    attach_feedback_to_query,
    get_query_records,
    get_query_records_from_farmer_id,
    save_query_record,
)
from krishi_mitra.core.store import AdvisoryStore
from krishi_mitra.models.advisory import AdviceResult
from krishi_mitra.models.farmer import FarmerProfile
from krishi_mitra.models.learning import (
    Analytics,
    CountEntry,
    EscalationRecord,
    FeedbackEntry,
    QueryDetails,
    QueryRecord,
)
from krishi_mitra.services.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

LANGUAGE_BUCKETS = ("en", "ml", "hi")


def _top(counter: Counter, n: int) -> List[CountEntry]:
    return [CountEntry(name=name, count=count) for name, count in counter.most_common(n)]


def language_distribution(languages: Iterable[str]) -> dict:
    distribution = {bucket: 0 for bucket in LANGUAGE_BUCKETS}
    distribution["other"] = 0
    for language in languages:
        key = language if language in LANGUAGE_BUCKETS else "other"
        distribution[key] += 1
    return distribution


class LearningLoop:
    """Persists every processed query and keeps farmer profiles up to date."""

    def __init__(
        self, store: AdvisoryStore, top_n: int = 5, clock: Optional[Clock] = None
    ) -> None:
        self.store = store
        self.top_n = top_n
        self.clock = clock or SystemClock()

    async def record(
        self,
        query: QueryDetails,
        advice: AdviceResult,
        escalation: Optional[EscalationRecord] = None,
    ) -> QueryRecord:
        """
        Upserts the farmer profile and appends the query, together with its
        escalation when there is one. All three carry the same timestamp.
        """
        now = self.clock.now()
        record = QueryRecord(
            farmer_id=query.farmer_id, query=query, response=advice, ts=now
        )
        if escalation is not None:
            escalation.query_id = record.id
            escalation.created_at = now

        async with self.store.farmer_lock(query.farmer_id):
            profile = await get_farmer_profile_from_id(self.store, query.farmer_id)
            if profile is None:
                profile = FarmerProfile(
                    id=query.farmer_id, location=query.location, joined_at=now
                )
                logger.info("Created profile for farmer %s", query.farmer_id)
            profile.query_history.append(record.id)
            if query.crop and query.crop not in profile.crops:
                profile.crops.append(query.crop)
            await save_farmer_profile(self.store, profile)
            await save_query_record(self.store, record, escalation)

        return record

    async def farmer_history(self, farmer_id: str, limit: int) -> List[QueryRecord]:
        return await get_query_records_from_farmer_id(self.store, farmer_id, limit)

    async def attach_feedback(
        self,
        query_id: str,
        rating: float,
        comments: str = "",
        is_helpful: bool = False,
    ) -> Optional[FeedbackEntry]:
        """
        Attaches feedback to a recorded query. Returns None, leaving both
        logs untouched, when the query id is unknown.
        """
        entry = FeedbackEntry(
            query_id=query_id,
            rating=rating,
            comments=comments,
            is_helpful=is_helpful,
            ts=self.clock.now(),
        )
        if not await attach_feedback_to_query(self.store, entry):
            logger.warning("Feedback for unknown query %s was not recorded", query_id)
            return None
        return entry

    async def get_analytics(self) -> Analytics:
        queries = await get_query_records(self.store)
        farmers = await get_farmer_profiles(self.store)
        escalations = await get_escalations(self.store)

        total = len(queries)
        escalation_rate = len(escalations) / total if total else 0.0
        avg_confidence = (
            sum(record.response.confidence for record in queries) / total
            if total
            else 0.0
        )
        crop_counts = Counter(crop for farmer in farmers for crop in farmer.crops)
        disease_counts = Counter(
            escalation.image_analysis.disease
            for escalation in escalations
            if escalation.image_analysis is not None
        )

        return Analytics(
            total_queries=total,
            total_farmers=len(farmers),
            escalation_rate=escalation_rate,
            avg_confidence=avg_confidence,
            top_crops=_top(crop_counts, self.top_n),
            top_diseases=_top(disease_counts, self.top_n),
            language_distribution=language_distribution(
                record.query.language for record in queries
            ),
        )
