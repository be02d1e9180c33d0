"""
Retrieval pipeline
"""

from domain.rag.retrieval.similarity import cosine_distances
from domain.rag.retrieval.types import RetrievedPassage

__all__ = [
    "RetrievedPassage",
    "cosine_distances",
]
