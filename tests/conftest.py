import asyncio
from datetime import datetime
from typing import Optional

import pytest

from krishi_mitra.core.config import Settings
from krishi_mitra.core.store import AdvisoryStore
from krishi_mitra.models.advisory import AdviceContext, AdviceResult, WeatherSnapshot
from krishi_mitra.models.learning import QueryDetails, QueryRecord
from krishi_mitra.services.knowledge_base import KnowledgeBase
from krishi_mitra.services.query_pipeline import AdvisoryPipeline
from krishi_mitra.services.weather_service import StaticWeatherProvider


class FixedClock:
    def __init__(self, month: int = 3) -> None:
        self.moment = datetime(2024, month, 15, 9, 30)

    def now(self) -> datetime:
        return self.moment


class FailingWeatherProvider:
    async def current_conditions(self, location: Optional[str]):
        raise ConnectionError("weather backend unreachable")


class SlowWeatherProvider:
    async def current_conditions(self, location: Optional[str]):
        await asyncio.sleep(1)
        return WeatherSnapshot(
            condition="rainy", temperature=24, humidity=90, rainfall="heavy"
        )


class FailingTranslator:
    async def translate(self, text: str, source_language: str) -> str:
        raise RuntimeError("translation backend down")


class FailingImageClassifier:
    async def classify(self, image_ref: str, crop: Optional[str]):
        raise OSError(f"cannot open {image_ref}")


def make_record(
    farmer_id: str = "f1",
    text: str = "question",
    crop: Optional[str] = None,
    confidence: float = 0.85,
    language: str = "en",
) -> QueryRecord:
    context = AdviceContext(crop=crop, season="pre-monsoon")
    return QueryRecord(
        farmer_id=farmer_id,
        query=QueryDetails(text=text, farmer_id=farmer_id, crop=crop, language=language),
        response=AdviceResult(
            main_advice="advice",
            confidence=confidence,
            should_escalate=confidence < 0.6,
            context=context,
        ),
    )


@pytest.fixture
def test_settings():
    return Settings(COLLABORATOR_TIMEOUT_SECONDS=0.2, WEATHER_PROVIDER="static")


@pytest.fixture
def store():
    return AdvisoryStore()


@pytest.fixture
def knowledge_base():
    return KnowledgeBase()


@pytest.fixture
def pipeline(store, test_settings):
    return AdvisoryPipeline(
        store=store,
        settings=test_settings,
        weather_provider=StaticWeatherProvider(),
        clock=FixedClock(month=3),
    )
