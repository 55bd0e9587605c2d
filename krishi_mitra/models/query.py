from typing import List, Optional

from pydantic import BaseModel, Field

from krishi_mitra.models.farmer import ANONYMOUS_FARMER_ID, FarmerProfile
from krishi_mitra.models.learning import EscalationRecord, QueryStatus


class QueryRequest(BaseModel):
    """A farmer query as received from the transport layer."""

    text: str = Field(default="", description="Free-text question, may be empty.")
    farmer_id: str = Field(default=ANONYMOUS_FARMER_ID)
    crop: str = Field(default="")
    location: str = Field(default="")
    season: str = Field(default="")
    language: str = Field(default="en", description="ISO code: en, ml, hi, ...")
    image_ref: Optional[str] = Field(
        default=None, description="Reference (path or URI) to an uploaded crop photo."
    )
    audio_ref: Optional[str] = Field(
        default=None, description="Reference (path or URI) to a recorded voice note."
    )


class ResolvedQueryContext(BaseModel):
    detected_crop: Optional[str] = None
    detected_disease: Optional[str] = None
    season: str
    location: Optional[str] = None
    language: str


class ProcessingDetails(BaseModel):
    nlp_processed: bool = False
    image_processed: bool = False
    voice_processed: bool = False


class QueryResponse(BaseModel):
    query_id: str
    answer: str
    recommendations: List[str] = Field(default_factory=list)
    confidence: float = Field(ge=0, le=1)
    status: QueryStatus
    escalation_id: Optional[str] = None
    context: ResolvedQueryContext
    processing_details: ProcessingDetails


class FeedbackRequest(BaseModel):
    query_id: str
    rating: float
    comments: str = ""
    is_helpful: bool = False


class FeedbackResponse(BaseModel):
    recorded: bool
    message: str


class EscalationView(EscalationRecord):
    farmer_info: Optional[FarmerProfile] = None


class VoiceRequest(BaseModel):
    audio_ref: str = ""


class TextToSpeechRequest(BaseModel):
    text: str
    language: str = "en"


class TextToSpeechResponse(BaseModel):
    audio_url: Optional[str] = None
    message: str
    supported_languages: List[str] = Field(default_factory=list)
