"""
Text embedding client
"""

from domain.rag.embedding.client import EmbeddingClient

__all__ = [
    "EmbeddingClient",
]
