"""
Admin endpoints for populating the retrieval store
"""

import logging
from fastapi import APIRouter, Depends
from api.auth import require_admin
from api.dependencies import get_retrieval_service
from api.schemas.admin import RagUploadRequest, RagUploadResponse
from api.schemas.common import AUTH_ERROR_RESPONSES, ErrorResponse
from services.retrieval_service import RetrievalService
from core.exceptions import ApiError, EmbeddingError, StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post(
    "/rag-upload",
    response_model=RagUploadResponse,
    responses={
        **AUTH_ERROR_RESPONSES,
        403: {"model": ErrorResponse, "description": "forbidden_admin_only"},
        400: {"model": ErrorResponse, "description": "invalid_body"},
        503: {"model": ErrorResponse, "description": "embedding or database not configured"},
        500: {"model": ErrorResponse, "description": "embedding_failed or upload_error"},
    },
)
async def rag_upload(
    upload_request: RagUploadRequest,
    retrieval_service: RetrievalService = Depends(get_retrieval_service)
):
    """
    Embed one document and store it under metadata.id.

    Uploading an id that already exists replaces its content, metadata and
    embedding.

    Args:
        upload_request: RagUploadRequest containing:
            - content: str - Document text
            - metadata: DocumentMetadata - id (required), title/source/category and
                        any additional scalar keys

    Returns:
        RagUploadResponse containing:
            - success: bool
            - message: str
    """
    metadata = upload_request.metadata.model_dump(exclude_none=True)
    try:
        await retrieval_service.ingest_document(upload_request.content, metadata)
    except ApiError:
        raise
    except EmbeddingError as e:
        raise ApiError(str(e), error_code="embedding_failed", status_code=500)
    except StorageError as e:
        logger.error(f"Failed to store document {metadata['id']}: {e}")
        raise ApiError("Failed to store document", error_code="upload_error", status_code=500)
    except Exception as e:
        logger.error(f"Unexpected upload error: {e}", exc_info=True)
        raise ApiError("Failed to store document", error_code="upload_error", status_code=500)
    return RagUploadResponse(success=True, message=f"Document {metadata['id']} stored")
