"""
Abstract base classes for storage
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional


class BaseRetrievalStore(ABC):
    """Abstract base class for retrieval document stores"""

    @abstractmethod
    async def upsert(
        self,
        content: str,
        metadata: Dict[str, Any],
        embedding: List[float]
    ) -> None:
        """
        Insert or replace the document keyed by metadata["id"].

        Content, metadata and embedding are written together or not at all.
        """
        pass

    @abstractmethod
    async def query(
        self,
        query_embedding: List[float],
        limit: int = 3
    ) -> List[Dict[str, Any]]:
        """
        Nearest documents to query_embedding, ascending distance.

        Returns:
            List of dicts with 'content', 'metadata' and 'distance'.
            Empty when no document has an embedding.
        """
        pass

    @abstractmethod
    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        """Get a stored document by id"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of stored documents"""
        pass

    @property
    def is_configured(self) -> bool:
        return True

    def check_configured(self) -> None:
        """Raise ConfigurationError if the store has no connection settings"""
        pass

    async def close(self) -> None:
        """Release pooled connections"""
        pass
