"""
Retrieval service - query embedding → similarity search, and document ingestion
"""

import logging
from typing import List, Dict, Any, Optional
from domain.chat.prompt import format_passages
from domain.rag.embedding.client import EmbeddingClient
from domain.rag.retrieval.types import RetrievedPassage
from storage.base import BaseRetrievalStore
from services.base import BaseService
from core.config import settings
from core.exceptions import ConfigurationError, EmbeddingError, StorageError

logger = logging.getLogger(__name__)


class RetrievalService(BaseService):
    """
    Owns the two paths into the retrieval store.

    - Chat: retrieve()/retrieve_context() are fail-open. Any embedding or store
      problem is logged and yields no context, never an exception.
    - Admin ingestion: ingest_document() is strict and raises on every failure.
    """

    def __init__(
        self,
        store: BaseRetrievalStore,
        embedding_client: EmbeddingClient,
        top_k: Optional[int] = None,
    ):
        self.store = store
        self.embedding_client = embedding_client
        self.top_k = top_k or settings.rag_top_k

    async def retrieve(self, query: str) -> List[RetrievedPassage]:
        """Top-k passages for a query, or [] if retrieval is unavailable"""
        if not query or not query.strip():
            return []
        if not self.embedding_client.is_configured:
            logger.warning("Retrieval skipped: embedding client not configured")
            return []
        if not self.store.is_configured:
            logger.warning("Retrieval skipped: retrieval store not configured")
            return []

        try:
            embedding = await self.embedding_client.embed(query)
            if embedding is None:
                logger.warning("Retrieval skipped: query embedding failed")
                return []

            rows = await self.store.query(embedding, self.top_k)
            passages = [RetrievedPassage(**row) for row in rows]
            logger.info(f"Retrieved {len(passages)} passages")
            return passages
        except (StorageError, ConfigurationError) as e:
            logger.warning(f"Retrieval skipped: retrieval store unavailable: {e}")
            return []
        except Exception as e:
            logger.error(f"Unexpected retrieval error, continuing without context: {e}", exc_info=True)
            return []

    async def retrieve_context(self, query: str) -> Optional[str]:
        """Retrieved passages formatted for the system prompt, None if nothing was found"""
        return format_passages(await self.retrieve(query))

    async def ingest_document(self, content: str, metadata: Dict[str, Any]) -> None:
        """
        Embed a document and upsert it under metadata["id"].

        Raises:
            ConfigurationError: embedding provider or store not configured (503)
            EmbeddingError: the embedding call failed
            StorageError: the write failed
        """
        if not self.embedding_client.is_configured:
            raise ConfigurationError(
                f"{self.embedding_client.provider} API key is not configured",
                error_code=self.embedding_client.not_configured_code,
            )
        self.store.check_configured()

        embedding = await self.embedding_client.embed(content)
        if embedding is None:
            raise EmbeddingError("Failed to generate embedding")

        await self.store.upsert(content, metadata, embedding)
        logger.info(f"Ingested document {metadata.get('id')}")
