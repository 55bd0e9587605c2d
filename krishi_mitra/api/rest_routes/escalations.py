from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from krishi_mitra.api.dependencies import get_pipeline
from krishi_mitra.models.query import EscalationView
from krishi_mitra.services.query_pipeline import AdvisoryPipeline

router = APIRouter(prefix="/escalations", tags=["Escalations"])


@router.get("/", response_model=List[EscalationView])
async def list_escalations(
    limit: Optional[int] = Query(None, ge=1, description="Most recent N escalations"),
    pipeline: AdvisoryPipeline = Depends(get_pipeline),
):
    return await pipeline.list_escalations(limit)
