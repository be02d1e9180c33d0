"""
Retrieval storage layer
"""

from storage.base import BaseRetrievalStore
from storage.retrieval_store import SQLRetrievalStore

__all__ = [
    "BaseRetrievalStore",
    "SQLRetrievalStore",
]
