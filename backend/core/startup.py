"""
Application startup and initialization logic
"""

import logging
from fastapi import FastAPI

from domain.auth.identity_client import SupabaseIdentityClient
from domain.llm.factory import create_llm_client
from domain.rag.embedding.client import EmbeddingClient
from storage import SQLRetrievalStore
from services.chat_service import ChatService
from services.retrieval_service import RetrievalService
from services.speech_service import SpeechService
from core.config import settings
from core.exceptions import ConfigurationError, LLMError

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging once from LOG_LEVEL"""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def raise_startup_error(message: str, error: Exception = None) -> None:
    """Abort startup; the app does not serve with a broken configuration."""
    detail = f"{message}: {error}" if error else message
    raise RuntimeError(detail)


async def initialize_services(app: FastAPI):
    """
    Build the shared clients and services once and store them on app.state.

    Missing credentials do not abort startup: the affected endpoints answer
    503 (completion, speech, ingestion) or run without context (chat retrieval).
    """
    identity_client = SupabaseIdentityClient()
    if not identity_client.is_configured:
        logger.warning(
            f"Supabase is not configured ({identity_client.config_status()}): "
            "every authenticated request will be refused"
        )

    # Initialize LLM client
    llm_client = None
    try:
        llm_client = create_llm_client()
    except ConfigurationError as e:
        logger.warning(f"LLM client not configured: {e}")
    except LLMError as e:
        raise_startup_error("Failed to initialize LLM client", e)

    try:
        embedding_client = EmbeddingClient()
    except ValueError as e:
        raise_startup_error("Failed to initialize embedding client", e)
    if not embedding_client.is_configured:
        logger.warning(f"Embedding client not configured ({embedding_client.provider}): chat runs without context")

    retrieval_store = SQLRetrievalStore()
    if not retrieval_store.is_configured:
        logger.warning("DATABASE_URL is not configured: chat runs without context, ingestion is disabled")

    speech_service = SpeechService()
    if not speech_service.is_configured:
        logger.warning("OPENAI_API_KEY is not configured: speech endpoints are disabled")

    retrieval_service = RetrievalService(
        store=retrieval_store,
        embedding_client=embedding_client,
    )
    chat_service = ChatService(
        retrieval_service=retrieval_service,
        llm_client=llm_client,
    )

    app.state.identity_client = identity_client
    app.state.llm_client = llm_client
    app.state.embedding_client = embedding_client
    app.state.retrieval_store = retrieval_store
    app.state.retrieval_service = retrieval_service
    app.state.chat_service = chat_service
    app.state.speech_service = speech_service

    logger.info(
        f"Services initialized (llm={settings.llm_provider}, embedding={embedding_client.provider}, "
        f"environment={settings.environment})"
    )


async def cleanup_services(app: FastAPI):
    """Close HTTP clients and dispose of the database pool."""
    for name in ("identity_client", "llm_client", "embedding_client", "speech_service", "retrieval_store"):
        resource = getattr(app.state, name, None)
        if resource is None:
            continue
        try:
            await resource.close()
            logger.info(f"{name} cleaned up")
        except Exception as e:
            logger.error(f"Error during {name} cleanup: {e}", exc_info=True)
