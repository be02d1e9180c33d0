"""
Request/Response schemas for admin document ingestion
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional


class DocumentMetadata(BaseModel):
    """
    Metadata stored with an ingested document.

    `id` is the document identity: ingesting the same id again replaces the
    stored document. Extra scalar keys are kept.
    """
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    title: Optional[str] = None
    source: Optional[str] = None
    category: Optional[str] = None

    @model_validator(mode="after")
    def extra_values_are_scalars(self):
        for key, value in (self.model_extra or {}).items():
            if value is not None and not isinstance(value, (str, int, float, bool)):
                raise ValueError(f"metadata.{key} must be a string, number or boolean")
        return self


class RagUploadRequest(BaseModel):
    """Request to ingest one document into the retrieval store"""
    content: str = Field(..., min_length=1)
    metadata: DocumentMetadata

    class Config:
        json_schema_extra = {
            "example": {
                "content": "Article 9. No one shall be subjected to arbitrary arrest, detention or exile.",
                "metadata": {
                    "id": "udhr-article-9",
                    "title": "Universal Declaration of Human Rights, Article 9",
                    "source": "UDHR",
                    "category": "detention",
                },
            }
        }


class RagUploadResponse(BaseModel):
    """Response after storing a document"""
    success: bool = True
    message: str = "Document stored"
