import logging
from typing import List, Optional

from krishi_mitra.collections.escalation import get_recent_escalations
from krishi_mitra.collections.farmer_profile import get_farmer_profile_from_id
from krishi_mitra.core.config import Settings
from krishi_mitra.core.store import AdvisoryStore
from krishi_mitra.models.advisory import ImageAnalysisResult, NluResult, VoiceTranscription
from krishi_mitra.models.farmer import ANONYMOUS_FARMER_ID
from krishi_mitra.models.learning import Analytics, QueryDetails
from krishi_mitra.models.query import (
    EscalationView,
    FeedbackResponse,
    ProcessingDetails,
    QueryRequest,
    QueryResponse,
    ResolvedQueryContext,
    TextToSpeechResponse,
)
from krishi_mitra.services.advice_service import generate_advice
from krishi_mitra.services.clock import Clock, SystemClock
from krishi_mitra.services.collaborator_guard import guarded_call
from krishi_mitra.services.context_builder import build_context
from krishi_mitra.services.escalation_service import decide
from krishi_mitra.services.image_analysis_service import (
    FilenamePatternImageClassifier,
    ImageClassifier,
)
from krishi_mitra.services.knowledge_base import KnowledgeBase
from krishi_mitra.services.learning_loop import LearningLoop
from krishi_mitra.services.nlu_service import understand
from krishi_mitra.services.speech_service import SpeechRecognizer, StaticSpeechRecognizer
from krishi_mitra.services.translation_service import PhraseTableTranslator, Translator
from krishi_mitra.services.tts_service import TextToSpeech, UnavailableTextToSpeech
from krishi_mitra.services.weather_service import (
    OpenWeatherMapProvider,
    StaticWeatherProvider,
    WeatherProvider,
)

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


class AdvisoryPipeline:
    """
    Runs one farmer query through understanding, context building, advice
    generation and the escalation policy, then records the outcome.
    """

    def __init__(
        self,
        *,
        store: AdvisoryStore,
        settings: Settings,
        knowledge_base: Optional[KnowledgeBase] = None,
        translator: Optional[Translator] = None,
        image_classifier: Optional[ImageClassifier] = None,
        speech_recognizer: Optional[SpeechRecognizer] = None,
        weather_provider: Optional[WeatherProvider] = None,
        text_to_speech: Optional[TextToSpeech] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.store = store
        self.settings = settings
        self.knowledge_base = knowledge_base or KnowledgeBase()
        self.translator = translator or PhraseTableTranslator()
        self.image_classifier = image_classifier or FilenamePatternImageClassifier()
        self.speech_recognizer = speech_recognizer or StaticSpeechRecognizer()
        self.weather_provider = weather_provider or StaticWeatherProvider()
        self.text_to_speech = text_to_speech or UnavailableTextToSpeech(
            settings.SUPPORTED_TTS_LANGUAGES
        )
        self.clock = clock or SystemClock()
        self.learning_loop = LearningLoop(
            store, top_n=settings.ANALYTICS_TOP_N, clock=self.clock
        )

    @property
    def timeout(self) -> float:
        return self.settings.COLLABORATOR_TIMEOUT_SECONDS

    async def transcribe_voice(self, audio_ref: str) -> Optional[VoiceTranscription]:
        return await guarded_call(
            "Speech recognition", self.speech_recognizer.transcribe(audio_ref), self.timeout
        )

    async def analyze_image(
        self, image_ref: str, crop: Optional[str]
    ) -> Optional[ImageAnalysisResult]:
        return await guarded_call(
            "Image classification",
            self.image_classifier.classify(image_ref, crop),
            self.timeout,
        )

    async def process_query(self, request: QueryRequest) -> QueryResponse:
        farmer_id = _clean(request.farmer_id) or ANONYMOUS_FARMER_ID
        crop = _clean(request.crop)
        crop = crop.lower() if crop else None
        location = _clean(request.location)
        season = _clean(request.season)
        language = _clean(request.language) or "en"
        text = request.text or ""

        voice = None
        if request.audio_ref:
            voice = await self.transcribe_voice(request.audio_ref)
            if voice is not None and voice.text:
                text = voice.text
                language = voice.language or language

        nlu: Optional[NluResult] = None
        if text.strip():
            nlu = await understand(text, language, self.translator, self.timeout)

        image = None
        if request.image_ref:
            image = await self.analyze_image(request.image_ref, crop)

        profile = await get_farmer_profile_from_id(self.store, farmer_id)
        history = await self.learning_loop.farmer_history(
            farmer_id, self.settings.FARMER_HISTORY_LIMIT
        )
        context = await build_context(
            crop=crop,
            location=location,
            season=season,
            nlu=nlu,
            profile=profile,
            history=history,
            month=self.clock.now().month,
            knowledge_base=self.knowledge_base,
            weather_provider=self.weather_provider,
            history_limit=self.settings.FARMER_HISTORY_LIMIT,
            timeout=self.timeout,
        )
        advice = generate_advice(nlu, image, context, self.knowledge_base)
        decision = decide(
            advice,
            farmer_id=farmer_id,
            query_text=text,
            nlu=nlu,
            image=image,
            location=context.location,
            crop=context.crop,
        )

        detected_crop = nlu.entities.crop if nlu is not None and nlu.error is None else None
        record = await self.learning_loop.record(
            QueryDetails(
                text=text,
                farmer_id=farmer_id,
                crop=crop or detected_crop,
                location=location,
                season=season,
                language=language,
            ),
            advice,
            decision.escalation,
        )

        logger.info(
            "Processed query %s farmer=%s crop=%s language=%s status=%s confidence=%.2f",
            record.id,
            farmer_id,
            context.crop,
            language,
            decision.status.value,
            advice.confidence,
        )

        return QueryResponse(
            query_id=record.id,
            answer=advice.main_advice,
            recommendations=advice.recommendations,
            confidence=advice.confidence,
            status=decision.status,
            escalation_id=decision.escalation.id if decision.escalation else None,
            context=ResolvedQueryContext(
                detected_crop=detected_crop or crop,
                detected_disease=image.disease if image is not None else None,
                season=context.season,
                location=context.location,
                language=language,
            ),
            processing_details=ProcessingDetails(
                nlp_processed=nlu is not None,
                image_processed=image is not None,
                voice_processed=voice is not None,
            ),
        )

    async def submit_feedback(
        self, query_id: str, rating: float, comments: str = "", is_helpful: bool = False
    ) -> FeedbackResponse:
        entry = await self.learning_loop.attach_feedback(
            query_id, rating, comments, is_helpful
        )
        if entry is None:
            return FeedbackResponse(
                recorded=False, message=f"Query {query_id} not found, feedback not recorded"
            )
        return FeedbackResponse(recorded=True, message="Feedback recorded successfully")

    async def list_escalations(self, limit: Optional[int] = None) -> List[EscalationView]:
        if limit is None:
            limit = self.settings.ESCALATION_LIST_LIMIT
        escalations = await get_recent_escalations(self.store, limit)
        views = []
        for escalation in escalations:
            farmer = await get_farmer_profile_from_id(self.store, escalation.farmer_id)
            views.append(
                EscalationView(**escalation.model_dump(), farmer_info=farmer)
            )
        return views

    async def get_analytics(self) -> Analytics:
        return await self.learning_loop.get_analytics()

    async def synthesize_speech(self, text: str, language: str) -> TextToSpeechResponse:
        return await self.text_to_speech.synthesize(text, language)


def build_pipeline(settings: Settings, store: Optional[AdvisoryStore] = None) -> AdvisoryPipeline:
    if settings.WEATHER_PROVIDER == "openweathermap" and settings.OPENWEATHERMAP_API_KEY:
        weather_provider = OpenWeatherMapProvider(settings.OPENWEATHERMAP_API_KEY)
    else:
        weather_provider = StaticWeatherProvider()
    return AdvisoryPipeline(
        store=store or AdvisoryStore(),
        settings=settings,
        weather_provider=weather_provider,
    )
