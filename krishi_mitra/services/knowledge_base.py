from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from krishi_mitra.knowledge.crops import CROP_DATABASE, DEFAULT_NEXT_ACTIVITY
from krishi_mitra.knowledge.schemes import SCHEMES
from krishi_mitra.models.knowledge import CropCalendar, CropKnowledge, Scheme


class KnowledgeBase:
    """Read-only crop and scheme reference data, keyed case-insensitively."""

    def __init__(
        self,
        crops: Mapping[str, dict] = CROP_DATABASE,
        schemes: Mapping[str, List[dict]] = SCHEMES,
    ) -> None:
        self._crops: Mapping[str, CropKnowledge] = MappingProxyType(
            {
                name.lower(): CropKnowledge(name=name.lower(), **data)
                for name, data in crops.items()
            }
        )
        self._schemes: Mapping[str, tuple] = MappingProxyType(
            {
                region.lower(): tuple(Scheme(**item) for item in items)
                for region, items in schemes.items()
            }
        )

    def get_crop(self, crop: Optional[str]) -> Optional[CropKnowledge]:
        if not crop:
            return None
        return self._crops.get(crop.strip().lower())

    def get_schemes(self, region: Optional[str]) -> List[Scheme]:
        if not region:
            return []
        return list(self._schemes.get(region.strip().lower(), ()))

    def treatment_for(self, crop: Optional[str], disease: str) -> Optional[str]:
        """
        Treatment for an exact (case-insensitive) disease name, falling back to
        the crop's first listed treatment. None if the crop is unknown or has
        no treatments at all.
        """
        info = self.get_crop(crop)
        if info is None or not info.treatments:
            return None
        treatments: Dict[str, str] = {k.lower(): v for k, v in info.treatments.items()}
        exact = treatments.get(disease.strip().lower())
        if exact is not None:
            return exact
        return next(iter(info.treatments.values()))

    def crop_calendar(self, crop: Optional[str]) -> Optional[CropCalendar]:
        info = self.get_crop(crop)
        if info is None:
            return None
        return CropCalendar(
            planting_season=info.seasons.plant,
            harvest_season=info.seasons.harvest,
            next_activity=DEFAULT_NEXT_ACTIVITY,
        )
