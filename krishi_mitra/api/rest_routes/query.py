from fastapi import APIRouter, Depends

from krishi_mitra.api.dependencies import get_pipeline
from krishi_mitra.models.query import QueryRequest, QueryResponse
from krishi_mitra.services.query_pipeline import AdvisoryPipeline

router = APIRouter(prefix="/query", tags=["Query"])


@router.post("/", response_model=QueryResponse)
async def process_query(
    query: QueryRequest, pipeline: AdvisoryPipeline = Depends(get_pipeline)
):
    """
    Answer a farmer query from text, a photo reference and/or a voice note.
    Low-confidence answers are also queued for expert review.
    """
    return await pipeline.process_query(query)
