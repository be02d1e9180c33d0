"""Tests for the speech service."""

import httpx
import openai
import pytest

from services.speech_service import SpeechService
from core.exceptions import ConfigurationError, SpeechError


async def test_transcribe(speech_service):
    assert await speech_service.transcribe(b"webm-bytes") == "hello"
    speech_service._client.audio.transcriptions.create.assert_awaited_once_with(
        file=("audio.webm", b"webm-bytes", "audio/webm"),
        model="whisper-1",
    )


async def test_synthesize_defaults(speech_service):
    assert await speech_service.synthesize("Hello") == b"ID3audio"
    speech_service._client.audio.speech.create.assert_awaited_once_with(
        model="tts-1",
        input="Hello",
        voice="alloy",
        response_format="mp3",
    )


async def test_synthesize_format_and_voice(speech_service):
    await speech_service.synthesize("Hola", voice="nova", audio_format="wav")
    kwargs = speech_service._client.audio.speech.create.await_args.kwargs
    assert kwargs["voice"] == "nova"
    assert kwargs["response_format"] == "wav"


async def test_synthesize_unknown_format(speech_service):
    with pytest.raises(ValueError):
        await speech_service.synthesize("Hello", audio_format="ogg")


async def test_provider_error(speech_service):
    speech_service._client.audio.transcriptions.create.side_effect = openai.APIConnectionError(
        request=httpx.Request("POST", "https://api.openai.com/v1/audio/transcriptions")
    )
    with pytest.raises(SpeechError):
        await speech_service.transcribe(b"audio")


async def test_not_configured():
    service = SpeechService(api_key="")
    assert not service.is_configured
    with pytest.raises(ConfigurationError) as exc_info:
        await service.synthesize("Hello")
    assert exc_info.value.error_code == "openai_not_configured"
