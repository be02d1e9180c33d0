"""
Speech endpoints (speech-to-text, text-to-speech)
"""

import logging
from fastapi import APIRouter, Depends, File, UploadFile, Response
from typing import Optional
from api.auth import require_user
from api.dependencies import get_speech_service
from api.schemas.common import AUTH_ERROR_RESPONSES, ErrorResponse
from api.schemas.speech import SpeechSynthesisRequest, TranscriptionResponse
from services.speech_service import AUDIO_CONTENT_TYPES, SpeechService
from core.config import settings
from core.exceptions import ApiError, SpeechError

logger = logging.getLogger(__name__)


async def require_speech_configured(
    speech_service: SpeechService = Depends(get_speech_service),
) -> None:
    """503 openai_not_configured before the request body is validated"""
    speech_service.check_configured()


router = APIRouter(
    prefix="/v1",
    tags=["speech"],
    dependencies=[Depends(require_user), Depends(require_speech_configured)],
)

DEFAULT_AUDIO_FILENAME = "audio.webm"
DEFAULT_AUDIO_CONTENT_TYPE = "audio/webm"


def _audio_too_large() -> ApiError:
    return ApiError(
        f"Audio file exceeds {settings.max_audio_size_mb} MB",
        error_code="audio_file_too_large",
        status_code=400,
    )


@router.post(
    "/stt",
    response_model=TranscriptionResponse,
    responses={
        **AUTH_ERROR_RESPONSES,
        400: {"model": ErrorResponse, "description": "audio_file_required or audio_file_too_large"},
        503: {"model": ErrorResponse, "description": "openai_not_configured"},
        500: {"model": ErrorResponse, "description": "whisper_error"},
    },
)
async def speech_to_text(
    audio: Optional[UploadFile] = File(default=None),
    speech_service: SpeechService = Depends(get_speech_service)
):
    """
    Transcribe the multipart `audio` field.

    The filename defaults to audio.webm and the MIME type to audio/webm when
    the upload does not carry them.
    """
    if audio is None:
        raise ApiError("No audio file provided", error_code="audio_file_required", status_code=400)

    max_bytes = settings.max_audio_size_mb * 1024 * 1024
    # Declared size is checked before the upload is read
    if audio.size is not None and audio.size > max_bytes:
        raise _audio_too_large()

    data = await audio.read()
    if not data:
        raise ApiError("No audio file provided", error_code="audio_file_required", status_code=400)
    if len(data) > max_bytes:
        raise _audio_too_large()

    try:
        text = await speech_service.transcribe(
            data,
            filename=audio.filename or DEFAULT_AUDIO_FILENAME,
            content_type=audio.content_type or DEFAULT_AUDIO_CONTENT_TYPE,
        )
    except SpeechError as e:
        raise ApiError(str(e), error_code="whisper_error", status_code=500)
    except Exception as e:
        logger.error(f"Unexpected transcription error: {e}", exc_info=True)
        raise ApiError("Transcription failed", error_code="whisper_error", status_code=500)
    return TranscriptionResponse(text=text)


@router.post(
    "/tts",
    response_class=Response,
    responses={
        **AUTH_ERROR_RESPONSES,
        200: {"content": {content_type: {} for content_type in AUDIO_CONTENT_TYPES.values()}},
        400: {"model": ErrorResponse, "description": "invalid_body"},
        503: {"model": ErrorResponse, "description": "openai_not_configured"},
        500: {"model": ErrorResponse, "description": "tts_error"},
    },
)
async def text_to_speech(
    synthesis_request: SpeechSynthesisRequest,
    speech_service: SpeechService = Depends(get_speech_service)
):
    """Synthesize speech and return the raw audio bytes"""
    audio_format = synthesis_request.format or "mp3"
    try:
        audio = await speech_service.synthesize(
            synthesis_request.text,
            voice=synthesis_request.voice,
            audio_format=audio_format,
        )
    except ApiError:
        raise
    except SpeechError as e:
        raise ApiError(str(e), error_code="tts_error", status_code=500)
    except Exception as e:
        logger.error(f"Unexpected speech synthesis error: {e}", exc_info=True)
        raise ApiError("Speech synthesis failed", error_code="tts_error", status_code=500)
    return Response(content=audio, media_type=AUDIO_CONTENT_TYPES[audio_format])
