"""
Speech service - speech-to-text and text-to-speech passthrough to OpenAI
"""

import logging
from typing import Dict, Optional
from openai import AsyncOpenAI, OpenAIError
from domain.llm.base import provider_error_message
from domain.llm.factory import not_configured_error
from services.base import BaseService
from core.config import settings
from core.exceptions import SpeechError

logger = logging.getLogger(__name__)

AUDIO_CONTENT_TYPES: Dict[str, str] = {
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "pcm": "audio/pcm",
}


class SpeechService(BaseService):
    """Single-call proxies for Whisper transcription and TTS synthesis"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        stt_model: Optional[str] = None,
        tts_model: Optional[str] = None,
        default_voice: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.stt_model = stt_model or settings.stt_model
        self.tts_model = tts_model or settings.tts_model
        self.default_voice = default_voice or settings.tts_default_voice
        self.timeout = timeout or settings.speech_timeout
        self._client: Optional[AsyncOpenAI] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def check_configured(self) -> None:
        """Raise 503 openai_not_configured if no key is configured"""
        if not self.api_key:
            raise not_configured_error("openai")

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client"""
        self.check_configured()
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    async def transcribe(
        self,
        audio: bytes,
        filename: str = "audio.webm",
        content_type: str = "audio/webm",
    ) -> str:
        """Transcribe recorded audio to text"""
        client = self._get_client()
        try:
            transcription = await client.audio.transcriptions.create(
                file=(filename, audio, content_type),
                model=self.stt_model,
            )
        except OpenAIError as e:
            logger.error(f"Error calling OpenAI transcription API: {e}")
            raise SpeechError(provider_error_message(e))
        return getattr(transcription, "text", "") or ""

    async def synthesize(
        self,
        text: str,
        voice: Optional[str] = None,
        audio_format: str = "mp3",
    ) -> bytes:
        """Synthesize speech; audio_format is one of AUDIO_CONTENT_TYPES"""
        if audio_format not in AUDIO_CONTENT_TYPES:
            raise ValueError(f"Unsupported audio format: {audio_format}")
        client = self._get_client()
        try:
            response = await client.audio.speech.create(
                model=self.tts_model,
                input=text,
                voice=voice or self.default_voice,
                response_format=audio_format,
            )
        except OpenAIError as e:
            logger.error(f"Error calling OpenAI speech API: {e}")
            raise SpeechError(provider_error_message(e))
        return response.content

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
