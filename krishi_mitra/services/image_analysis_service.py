from pathlib import PurePath
from typing import Optional, Protocol

from krishi_mitra.models.advisory import UNKNOWN_CONDITION, ImageAnalysisResult, Severity

HIGH_SEVERITY_CONFIDENCE = 0.8

# File-name fragment -> (disease label, confidence), checked in this order.
DISEASE_PATTERNS = [
    ("spot", "Leaf Spot", 0.82),
    ("blight", "Late Blight", 0.89),
    ("yellow", "Nutrient Deficiency", 0.75),
    ("brown", "Fungal Infection", 0.78),
]


class ImageClassifier(Protocol):
    async def classify(
        self, image_ref: str, crop: Optional[str]
    ) -> ImageAnalysisResult: ...


def severity_for(confidence: float) -> Severity:
    return Severity.HIGH if confidence > HIGH_SEVERITY_CONFIDENCE else Severity.MEDIUM


class FilenamePatternImageClassifier:
    """
    Stand-in classifier: reads the finding off the image file name, so that
    'banana_leaf_spot.jpg' is diagnosed as Leaf Spot.
    """

    async def classify(
        self, image_ref: str, crop: Optional[str]
    ) -> ImageAnalysisResult:
        file_name = PurePath(image_ref).name.lower()
        for pattern, disease, confidence in DISEASE_PATTERNS:
            if pattern in file_name:
                return ImageAnalysisResult(
                    disease=disease,
                    confidence=confidence,
                    symptoms=[f"Visible {pattern} patterns", "Affected leaf areas"],
                    severity=severity_for(confidence),
                )
        return ImageAnalysisResult(
            disease=UNKNOWN_CONDITION,
            confidence=0.45,
            symptoms=["Unclear symptoms from image"],
            severity=Severity.LOW,
        )
