from typing import List, Optional

from krishi_mitra.core.store import AdvisoryStore
from krishi_mitra.models.farmer import FarmerProfile


async def get_farmer_profile_from_id(
    store: AdvisoryStore, farmer_id: str
) -> Optional[FarmerProfile]:
    profile = store.farmers.get(farmer_id)
    return profile.model_copy(deep=True) if profile else None


async def get_farmer_profiles(store: AdvisoryStore) -> List[FarmerProfile]:
    return [profile.model_copy(deep=True) for profile in store.farmers.values()]


async def save_farmer_profile(
    store: AdvisoryStore, profile: FarmerProfile
) -> FarmerProfile:
    store.farmers[profile.id] = profile.model_copy(deep=True)
    return profile
