import logging
from typing import Optional

from pydantic import BaseModel

from krishi_mitra.models.advisory import AdviceResult, ImageAnalysisResult, NluResult
from krishi_mitra.models.learning import EscalationPriority, EscalationRecord, QueryStatus

logger = logging.getLogger(__name__)

ESCALATION_CONFIDENCE_THRESHOLD = 0.6
HIGH_PRIORITY_CONFIDENCE_THRESHOLD = 0.4


def needs_escalation(confidence: float) -> bool:
    return confidence < ESCALATION_CONFIDENCE_THRESHOLD


def escalation_priority(confidence: float) -> EscalationPriority:
    if confidence < HIGH_PRIORITY_CONFIDENCE_THRESHOLD:
        return EscalationPriority.HIGH
    return EscalationPriority.MEDIUM


class EscalationDecision(BaseModel):
    status: QueryStatus
    escalation: Optional[EscalationRecord] = None


def decide(
    advice: AdviceResult,
    *,
    farmer_id: str,
    query_text: str,
    nlu: Optional[NluResult] = None,
    image: Optional[ImageAnalysisResult] = None,
    location: Optional[str] = None,
    crop: Optional[str] = None,
) -> EscalationDecision:
    """
    Answers the query automatically or routes it to human review. The
    returned record is not persisted here.
    """
    if not needs_escalation(advice.confidence):
        return EscalationDecision(status=QueryStatus.ANSWERED)

    record = EscalationRecord(
        farmer_id=farmer_id,
        original_query=query_text,
        nlu_result=nlu,
        image_analysis=image,
        advice=advice,
        location=location,
        crop=crop,
        priority=escalation_priority(advice.confidence),
    )
    logger.info(
        "Escalating query from farmer %s (confidence=%.2f, priority=%s)",
        farmer_id,
        advice.confidence,
        record.priority.value,
    )
    return EscalationDecision(status=QueryStatus.ESCALATED, escalation=record)
