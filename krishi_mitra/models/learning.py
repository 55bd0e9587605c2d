from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from krishi_mitra.models.advisory import AdviceResult, ImageAnalysisResult, NluResult


class QueryStatus(str, Enum):
    ANSWERED = "answered"
    ESCALATED = "escalated"


class EscalationPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"


class QueryDetails(BaseModel):
    """The query as it was processed (after voice transcription)."""

    text: str = ""
    farmer_id: str
    crop: Optional[str] = None
    location: Optional[str] = None
    season: Optional[str] = None
    language: str = "en"


class FeedbackEntry(BaseModel):
    query_id: str
    rating: float
    comments: str = ""
    is_helpful: bool
    ts: datetime = Field(default_factory=datetime.utcnow)


class QueryRecord(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    ts: datetime = Field(default_factory=datetime.utcnow)
    farmer_id: str
    query: QueryDetails
    response: AdviceResult
    feedback: Optional[FeedbackEntry] = None


class EscalationRecord(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    query_id: Optional[str] = Field(
        default=None, description="Query record this escalation was raised for."
    )
    farmer_id: str
    original_query: str
    nlu_result: Optional[NluResult] = None
    image_analysis: Optional[ImageAnalysisResult] = None
    advice: AdviceResult
    location: Optional[str] = None
    crop: Optional[str] = None
    priority: EscalationPriority
    created_at: datetime = Field(default_factory=datetime.utcnow)


class CountEntry(BaseModel):
    name: str
    count: int


class Analytics(BaseModel):
    total_queries: int
    total_farmers: int
    escalation_rate: float = Field(
        ge=0, description="Escalations per query; 0 when no query was recorded."
    )
    avg_confidence: float = Field(
        ge=0, description="Mean advice confidence; 0 when no query was recorded."
    )
    top_crops: List[CountEntry] = Field(default_factory=list)
    top_diseases: List[CountEntry] = Field(default_factory=list)
    language_distribution: Dict[str, int] = Field(default_factory=dict)
