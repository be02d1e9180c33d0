"""
Retrieval data types
"""

from typing import Dict, Any
from pydantic import BaseModel


class RetrievedPassage(BaseModel):
    """
    Read-only projection of a stored document returned by a similarity query.

    The store stays the owner of the document; this is a copy of what the
    prompt needs.
    """
    content: str
    metadata: Dict[str, Any]
    distance: float

    @property
    def title(self) -> str:
        return self.metadata.get("title") or "Document"
