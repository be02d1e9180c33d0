"""
FastAPI dependencies
"""

from fastapi import Request
from domain.auth.identity_client import SupabaseIdentityClient
from services.chat_service import ChatService
from services.retrieval_service import RetrievalService
from services.speech_service import SpeechService


def get_identity_client(request: Request) -> SupabaseIdentityClient:
    return request.app.state.identity_client


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


def get_retrieval_service(request: Request) -> RetrievalService:
    return request.app.state.retrieval_service


def get_speech_service(request: Request) -> SpeechService:
    return request.app.state.speech_service
