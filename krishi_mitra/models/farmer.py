from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

ANONYMOUS_FARMER_ID = "anonymous"


class FarmerProfile(BaseModel):
    """
    Accumulated per-farmer state. Created on the first query from a farmer id,
    never deleted, and only mutated by the learning loop.
    """

    id: str = Field(description="Farmer id as supplied by the caller.")
    location: Optional[str] = Field(
        default=None, description="Location given with the first query."
    )
    crops: List[str] = Field(
        default_factory=list,
        description="Distinct crops ever mentioned, in first-seen order.",
    )
    query_history: List[str] = Field(
        default_factory=list, description="Ids of the farmer's query records."
    )
    joined_at: datetime = Field(default_factory=datetime.utcnow)
