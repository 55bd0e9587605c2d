from typing import List

from krishi_mitra.core.store import AdvisoryStore
from krishi_mitra.models.learning import EscalationRecord


async def get_recent_escalations(
    store: AdvisoryStore, limit: int
) -> List[EscalationRecord]:
    if limit <= 0:
        return []
    return store.escalations[-limit:]


async def get_escalations(store: AdvisoryStore) -> List[EscalationRecord]:
    return list(store.escalations)
