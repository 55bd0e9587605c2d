from typing import List, Optional

from krishi_mitra.core.store import AdvisoryStore
from krishi_mitra.models.learning import EscalationRecord, FeedbackEntry, QueryRecord


async def save_query_record(
    store: AdvisoryStore,
    record: QueryRecord,
    escalation: Optional[EscalationRecord] = None,
) -> QueryRecord:
    """
    Appends the query and, when it was escalated, its escalation record in
    one step so readers never see one without the other.
    """
    async with store.log_lock:
        store.queries.append(record)
        store.index_query(record)
        if escalation is not None:
            store.escalations.append(escalation)
    return record


async def get_query_record_from_id(
    store: AdvisoryStore, query_id: str
) -> Optional[QueryRecord]:
    return store.find_query(query_id)


async def get_query_records_from_farmer_id(
    store: AdvisoryStore, farmer_id: str, limit: Optional[int] = None
) -> List[QueryRecord]:
    records = [record for record in store.queries if record.farmer_id == farmer_id]
    if limit is not None:
        records = records[-limit:] if limit > 0 else []
    return records


async def get_query_records(store: AdvisoryStore) -> List[QueryRecord]:
    return list(store.queries)


async def attach_feedback_to_query(
    store: AdvisoryStore, entry: FeedbackEntry
) -> bool:
    """Sets the feedback of an existing query and logs it. False if unknown."""
    async with store.log_lock:
        record = await get_query_record_from_id(store, entry.query_id)
        if record is None:
            return False
        record.feedback = entry
        store.feedback.append(entry)
    return True
