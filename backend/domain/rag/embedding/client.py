"""
Async embedding API client (OpenAI-compatible /v1/embeddings endpoints)
"""

import logging
from typing import List, Dict, Any, Optional
import httpx
from core.config import settings

logger = logging.getLogger(__name__)

# Default endpoint per provider; both accept {"model", "input"} and return data[0].embedding
EMBEDDING_ENDPOINTS: Dict[str, str] = {
    "mistral": "https://api.mistral.ai/v1/embeddings",
    "openai": "https://api.openai.com/v1/embeddings",
}

# Settings field holding each provider's API key
API_KEY_FIELDS: Dict[str, str] = {
    "mistral": "mistral_api_key",
    "openai": "openai_api_key",
}


class EmbeddingClient:
    """
    Async client for a text embedding API.

    embed() never raises on provider failure: it logs and returns None so callers
    can skip retrieval instead of failing the request. A missing API key is a
    separate condition, reported by is_configured.
    """

    def __init__(
        self,
        provider: str = None,
        api_key: str = None,
        api_url: str = None,
        model: str = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.provider = (provider or settings.embedding_provider).lower()
        if self.provider not in EMBEDDING_ENDPOINTS:
            raise ValueError(
                f"Invalid embedding provider: {self.provider}. Must be one of: {', '.join(EMBEDDING_ENDPOINTS)}"
            )

        self.api_key = api_key if api_key is not None else getattr(settings, API_KEY_FIELDS[self.provider])
        self.api_url = api_url or settings.embedding_api_url or EMBEDDING_ENDPOINTS[self.provider]
        self.model = model or settings.embedding_model
        self.timeout = timeout or settings.embedding_timeout

        # Connection pool
        self._client: Optional[httpx.AsyncClient] = None
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def not_configured_code(self) -> str:
        return f"{self.provider}_not_configured"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                }
            )
        return self._client

    @staticmethod
    def _extract_embedding(data: Any) -> Optional[List[float]]:
        """Pull data[0].embedding out of the response body, None if the shape is wrong"""
        try:
            embedding = data["data"][0]["embedding"]
        except (KeyError, IndexError, TypeError):
            return None
        if not isinstance(embedding, list) or not embedding:
            return None
        try:
            return [float(x) for x in embedding]
        except (TypeError, ValueError):
            return None

    async def embed(self, text: str) -> Optional[List[float]]:
        """
        Generate an embedding for a single text.

        Returns:
            The embedding vector, or None if the key is missing or the call failed
        """
        if not self.api_key:
            logger.warning(f"Embedding skipped: {self.provider} API key not configured")
            return None

        try:
            client = await self._get_client()
            response = await client.post(
                self.api_url,
                json={"model": self.model, "input": text},
            )
            response.raise_for_status()
            embedding = self._extract_embedding(response.json())
            if embedding is None:
                logger.error(f"Malformed {self.provider} embedding response")
            return embedding

        except httpx.HTTPStatusError as e:
            logger.error(f"{self.provider} embedding API error: {e.response.status_code} - {e.response.text}")
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error generating embedding: {e}")
            return None

    async def close(self):
        """Close HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None
