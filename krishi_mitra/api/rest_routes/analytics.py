from fastapi import APIRouter, Depends

from krishi_mitra.api.dependencies import get_pipeline
from krishi_mitra.models.learning import Analytics
from krishi_mitra.services.query_pipeline import AdvisoryPipeline

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("/", response_model=Analytics)
async def get_analytics(pipeline: AdvisoryPipeline = Depends(get_pipeline)):
    return await pipeline.get_analytics()
