import asyncio

from krishi_mitra.models.advisory import ImageAnalysisResult, WeatherSnapshot
from krishi_mitra.models.learning import EscalationPriority, QueryStatus
from krishi_mitra.models.query import QueryRequest
from krishi_mitra.services.advice_service import URGENCY_NOTICE
from krishi_mitra.services.image_analysis_service import severity_for
from krishi_mitra.services.query_pipeline import AdvisoryPipeline, build_pipeline
from krishi_mitra.services.weather_service import (
    OpenWeatherMapProvider,
    StaticWeatherProvider,
)

from conftest import (
    FailingImageClassifier,
    FailingTranslator,
    FailingWeatherProvider,
    FixedClock,
)


class FixedImageClassifier:
    def __init__(self, disease, confidence):
        self.result = ImageAnalysisResult(
            disease=disease,
            confidence=confidence,
            symptoms=["Affected leaf areas"],
            severity=severity_for(confidence),
        )

    async def classify(self, image_ref, crop):
        return self.result


def _run(pipeline, **fields):
    return asyncio.run(pipeline.process_query(QueryRequest(**fields)))


class TestScenarios:
    def test_text_disease_question_is_answered(self, pipeline, store):
        response = _run(
            pipeline, text="my tomato has late blight spots", crop="tomato"
        )
        assert "photo" in response.answer
        assert "tomato" in response.answer
        assert response.confidence == 0.85
        assert response.status == QueryStatus.ANSWERED
        assert response.escalation_id is None
        assert store.escalations == []

    def test_photo_diagnosis_uses_crop_treatment(self, pipeline):
        response = _run(
            pipeline, crop="banana", image_ref="/uploads/banana_leaf_spot.jpg"
        )
        # the filename classifier reports Leaf Spot at 0.82
        assert "Copper oxychloride 0.3% or Mancozeb 0.2%" in response.answer
        assert response.context.detected_disease == "Leaf Spot"
        assert URGENCY_NOTICE in response.answer
        assert response.status == QueryStatus.ANSWERED

    def test_uncertain_leaf_spot_is_escalated_with_medium_priority(
        self, store, test_settings
    ):
        pipeline = AdvisoryPipeline(
            store=store,
            settings=test_settings,
            image_classifier=FixedImageClassifier("Leaf Spot", 0.45),
            clock=FixedClock(month=3),
        )
        response = _run(pipeline, crop="banana", image_ref="/uploads/img.jpg")
        assert "Copper oxychloride 0.3% or Mancozeb 0.2%" in response.answer
        assert response.confidence == 0.45
        assert response.status == QueryStatus.ESCALATED
        assert store.escalations[0].priority == EscalationPriority.MEDIUM
        assert store.escalations[0].crop == "banana"

    def test_empty_query_is_escalated_with_high_priority(self, pipeline, store):
        response = _run(pipeline)
        assert response.confidence == 0.3
        assert response.status == QueryStatus.ESCALATED
        assert len(store.escalations) == 1
        escalation = store.escalations[0]
        assert escalation.priority == EscalationPriority.HIGH
        assert escalation.id == response.escalation_id
        assert escalation.query_id == response.query_id
        assert response.processing_details.nlp_processed is False

    def test_repeated_crop_is_recorded_once(self, pipeline, store):
        _run(pipeline, text="rice question", farmer_id="f1", crop="rice")
        _run(pipeline, text="rice again", farmer_id="f1", crop="rice")
        assert store.farmers["f1"].crops == ["rice"]

    def test_scheme_question_lists_kerala_schemes(self, pipeline):
        response = _run(
            pipeline, text="Any government scheme for me?", location="kerala"
        )
        assert (
            "Krishi Bhavan Support, Organic Farming Subsidy, Crop Insurance"
            in response.answer
        )


def test_unknown_condition_image_without_text_is_escalated(pipeline, store):
    response = _run(pipeline, crop="rice", image_ref="/uploads/photo.jpg")
    assert response.context.detected_disease == "Unknown condition"
    assert response.confidence == 0.3
    assert response.status == QueryStatus.ESCALATED
    assert store.escalations[0].image_analysis.disease == "Unknown condition"


def test_voice_note_replaces_text_and_language(pipeline, store):
    response = _run(pipeline, text="ignored", audio_ref="/audio/note.webm")
    assert response.processing_details.voice_processed is True
    assert response.context.language == "ml"
    assert response.context.detected_crop == "banana"
    assert store.queries[0].query.language == "ml"
    assert store.queries[0].query.text.startswith("വാഴയിൽ")


def test_collaborator_failures_degrade_instead_of_failing(store, test_settings):
    pipeline = AdvisoryPipeline(
        store=store,
        settings=test_settings,
        translator=FailingTranslator(),
        image_classifier=FailingImageClassifier(),
        weather_provider=FailingWeatherProvider(),
        clock=FixedClock(month=7),
    )
    response = _run(
        pipeline,
        text="രോഗം",
        language="ml",
        crop="banana",
        image_ref="/uploads/spot.jpg",
    )
    assert response.processing_details.image_processed is False
    assert response.context.detected_disease is None
    # monsoon + crop calendar, but no weather-based drainage warning
    assert response.recommendations == [
        "Monsoon season - increase surveillance for disease outbreaks",
        "Upcoming: Apply fertilizer in 2 weeks",
    ]
    assert len(store.queries) == 1


def test_rainy_weather_adds_drainage_warning(store, test_settings):
    pipeline = AdvisoryPipeline(
        store=store,
        settings=test_settings,
        weather_provider=StaticWeatherProvider(
            WeatherSnapshot(condition="rainy", temperature=25, humidity=92, rainfall="heavy")
        ),
        clock=FixedClock(month=3),
    )
    response = _run(pipeline, text="fertilizer for rice", crop="rice")
    assert "drainage" in response.recommendations[0]


def test_profile_fills_context_for_returning_farmer(pipeline):
    _run(pipeline, text="hello", farmer_id="f9", crop="banana", location="kerala")
    response = _run(pipeline, text="insects everywhere", farmer_id="f9")
    assert "aphids, nematodes, thrips" in response.answer
    assert response.context.location == "kerala"


def test_status_always_agrees_with_confidence(pipeline):
    requests = [
        {},
        {"text": "hello"},
        {"crop": "tomato", "image_ref": "tomato_blight.png"},
        {"crop": "rice", "image_ref": "rice_yellow.png"},
        {"crop": "rice", "image_ref": "plain.png"},
    ]
    for fields in requests:
        response = _run(pipeline, **fields)
        assert 0 <= response.confidence <= 1
        assert (response.status == QueryStatus.ESCALATED) == (response.confidence < 0.6)


def test_records_are_stamped_by_the_pipeline_clock(pipeline, store):
    moment = FixedClock(month=3).moment
    response = _run(pipeline, farmer_id="f1")
    asyncio.run(pipeline.submit_feedback(response.query_id, 2, "", False))

    assert store.queries[0].ts == moment
    assert store.escalations[0].created_at == moment
    assert store.farmers["f1"].joined_at == moment
    assert store.feedback[0].ts == moment


def test_feedback_round_trip(pipeline, store):
    response = _run(pipeline, text="rice blast?", crop="rice")
    result = asyncio.run(pipeline.submit_feedback(response.query_id, 5, "great", True))
    assert result.recorded is True
    assert store.queries[0].feedback.rating == 5

    missing = asyncio.run(pipeline.submit_feedback("nope", 1))
    assert missing.recorded is False
    assert len(store.feedback) == 1


def test_list_escalations_joins_farmer_profile(pipeline):
    _run(pipeline, farmer_id="f1", location="kerala")
    _run(pipeline, farmer_id="f2")
    _run(pipeline, farmer_id="f3", text="rice fertilizer", crop="rice")

    escalations = asyncio.run(pipeline.list_escalations())
    assert [e.farmer_id for e in escalations] == ["f1", "f2"]
    assert escalations[0].farmer_info.location == "kerala"

    latest = asyncio.run(pipeline.list_escalations(limit=1))
    assert [e.farmer_id for e in latest] == ["f2"]


def test_build_pipeline_selects_weather_provider(test_settings):
    assert isinstance(build_pipeline(test_settings).weather_provider, StaticWeatherProvider)

    configured = test_settings.model_copy(
        update={"WEATHER_PROVIDER": "openweathermap", "OPENWEATHERMAP_API_KEY": "key"}
    )
    assert isinstance(
        build_pipeline(configured).weather_provider, OpenWeatherMapProvider
    )
