import asyncio
from collections import defaultdict
from typing import Dict, List

from krishi_mitra.models.farmer import FarmerProfile
from krishi_mitra.models.learning import EscalationRecord, FeedbackEntry, QueryRecord


class AdvisoryStore:
    """
    In-process state of the advisory service.

    Built once per application lifetime (or once per test) and handed to the
    pipeline. Farmer upserts are serialised per farmer id, appends to the
    logs are serialised through a single log lock.
    """

    def __init__(self) -> None:
        self.farmers: Dict[str, FarmerProfile] = {}
        self.queries: List[QueryRecord] = []
        self.escalations: List[EscalationRecord] = []
        self.feedback: List[FeedbackEntry] = []
        self._query_index: Dict[str, QueryRecord] = {}
        self._farmer_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)
        self._log_lock = asyncio.Lock()

    @property
    def log_lock(self) -> asyncio.Lock:
        return self._log_lock

    def farmer_lock(self, farmer_id: str) -> asyncio.Lock:
        return self._farmer_locks[farmer_id]

    def index_query(self, record: QueryRecord) -> None:
        self._query_index[record.id] = record

    def find_query(self, query_id: str) -> QueryRecord | None:
        return self._query_index.get(query_id)
