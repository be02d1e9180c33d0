"""
Root and health check endpoints
"""

from fastapi import APIRouter
from api.schemas.common import HealthResponse

router = APIRouter(tags=["root"])


@router.get("/")
async def root():
    """API root endpoint - returns API information"""
    return {
        "name": "Humana API",
        "version": "0.1.0",
        "docs": "/docs",
        "endpoints": {
            "chat": "/v1/chat",
            "stt": "/v1/stt",
            "tts": "/v1/tts",
            "rag_upload": "/admin/rag-upload",
            "health": "/health",
        }
    }


@router.get("/health", response_model=HealthResponse)
async def health():
    """Liveness probe. Touches no external dependency."""
    return HealthResponse(ok=True)
