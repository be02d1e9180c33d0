"""
Request/Response schemas for speech endpoints
"""

from pydantic import BaseModel, Field
from typing import Literal, Optional


class TranscriptionResponse(BaseModel):
    """Response after transcribing an audio upload"""
    text: str


class SpeechSynthesisRequest(BaseModel):
    """Request to synthesize speech"""
    text: str = Field(..., min_length=1)
    voice: Optional[str] = None
    format: Optional[Literal["mp3", "wav", "pcm"]] = None
