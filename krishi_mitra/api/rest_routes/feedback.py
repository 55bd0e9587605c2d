from fastapi import APIRouter, Depends

from krishi_mitra.api.dependencies import get_pipeline
from krishi_mitra.models.query import FeedbackRequest, FeedbackResponse
from krishi_mitra.services.query_pipeline import AdvisoryPipeline

router = APIRouter(prefix="/feedback", tags=["Feedback"])


@router.post("/", response_model=FeedbackResponse)
async def submit_feedback(
    feedback: FeedbackRequest, pipeline: AdvisoryPipeline = Depends(get_pipeline)
):
    """
    Attach a farmer's rating to an answered query. Feedback for an unknown
    query id is reported back with ``recorded: false``.
    """
    return await pipeline.submit_feedback(
        feedback.query_id,
        feedback.rating,
        feedback.comments,
        feedback.is_helpful,
    )
