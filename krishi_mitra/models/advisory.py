from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from krishi_mitra.models.knowledge import CropCalendar

UNKNOWN_CONDITION = "Unknown condition"


class Intent(str, Enum):
    """Purpose categories a farmer query can be classified into."""

    DISEASE_DIAGNOSIS = "disease_diagnosis"
    PEST_CONTROL = "pest_control"
    FERTILIZER_ADVICE = "fertilizer_advice"
    WEATHER_QUERY = "weather_query"
    SCHEME_INFO = "scheme_info"
    GENERAL_QUERY = "general_query"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NluEntities(BaseModel):
    """One slot per entity category; location and season are never filled lexically."""

    crop: Optional[str] = None
    disease: Optional[str] = None
    pest: Optional[str] = None
    location: Optional[str] = None
    season: Optional[str] = None


class NluResult(BaseModel):
    original_text: str = ""
    translated_text: Optional[str] = None
    entities: NluEntities = Field(default_factory=NluEntities)
    intent: Optional[Intent] = None
    confidence: float = Field(default=0.0, ge=0, le=1)
    error: Optional[str] = Field(
        default=None,
        description="Set when understanding failed; such a result carries no "
        "entities and no intent.",
    )


class ImageAnalysisResult(BaseModel):
    disease: str
    confidence: float = Field(ge=0, le=1)
    symptoms: List[str] = Field(default_factory=list)
    severity: Severity

    @property
    def has_finding(self) -> bool:
        return self.disease != UNKNOWN_CONDITION


class VoiceTranscription(BaseModel):
    text: str
    language: str
    confidence: float = Field(ge=0, le=1)


class WeatherSnapshot(BaseModel):
    condition: str
    temperature: float
    humidity: float
    rainfall: str


class PreviousQuery(BaseModel):
    """Compact view of an earlier query, used as advisory context only."""

    id: str
    ts: datetime
    text: str
    crop: Optional[str] = None
    confidence: float


class AdviceContext(BaseModel):
    location: Optional[str] = None
    crop: Optional[str] = None
    season: str
    previous_queries: List[PreviousQuery] = Field(default_factory=list)
    weather: Optional[WeatherSnapshot] = None
    crop_calendar: Optional[CropCalendar] = None


class AdviceResult(BaseModel):
    main_advice: str
    recommendations: List[str] = Field(default_factory=list)
    confidence: float = Field(ge=0, le=1)
    should_escalate: bool
    context: AdviceContext
