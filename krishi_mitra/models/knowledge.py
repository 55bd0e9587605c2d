from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CropSeasons(BaseModel):
    """Planting and harvest windows, as free text (e.g. 'June-July')."""

    model_config = ConfigDict(frozen=True)

    plant: str
    harvest: str


class CropKnowledge(BaseModel):
    """Reference data for a single crop."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Lower-case crop name, the lookup key.")
    diseases: List[str] = Field(default_factory=list)
    pests: List[str] = Field(default_factory=list)
    seasons: CropSeasons
    treatments: Dict[str, str] = Field(
        default_factory=dict,
        description="Disease name to treatment. Insertion order is meaningful, "
        "the first entry is the fallback treatment.",
    )


class Scheme(BaseModel):
    """A government support scheme available in a region."""

    model_config = ConfigDict(frozen=True)

    name: str
    eligibility: str
    benefit: str


class CropCalendar(BaseModel):
    planting_season: str
    harvest_season: str
    next_activity: Optional[str] = None
