"""
Service layer (business logic orchestration)
"""

from services.base import BaseService
from services.chat_service import ChatService
from services.retrieval_service import RetrievalService
from services.speech_service import SpeechService

__all__ = [
    "BaseService",
    "ChatService",
    "RetrievalService",
    "SpeechService",
]
