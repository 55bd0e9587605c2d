from fastapi import APIRouter, Depends, HTTPException, status

from krishi_mitra.api.dependencies import get_pipeline
from krishi_mitra.models.advisory import VoiceTranscription
from krishi_mitra.models.query import (
    TextToSpeechRequest,
    TextToSpeechResponse,
    VoiceRequest,
)
from krishi_mitra.services.query_pipeline import AdvisoryPipeline

router = APIRouter(tags=["Voice"])


@router.post("/voice", response_model=VoiceTranscription)
async def transcribe_voice_note(
    voice: VoiceRequest, pipeline: AdvisoryPipeline = Depends(get_pipeline)
):
    if not voice.audio_ref.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No audio file provided",
        )
    transcription = await pipeline.transcribe_voice(voice.audio_ref)
    if transcription is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not process voice input",
        )
    return transcription


@router.post("/tts", response_model=TextToSpeechResponse)
async def text_to_speech(
    tts: TextToSpeechRequest, pipeline: AdvisoryPipeline = Depends(get_pipeline)
):
    return await pipeline.synthesize_speech(tts.text, tts.language)
