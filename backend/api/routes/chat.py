"""
Chat endpoint
"""

import logging
from fastapi import APIRouter, Depends
from api.auth import require_user
from api.dependencies import get_chat_service
from api.schemas.chat import ChatRequest, ChatResponse
from api.schemas.common import AUTH_ERROR_RESPONSES, ErrorResponse
from services.chat_service import ChatService
from core.exceptions import ApiError, LLMError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["chat"], dependencies=[Depends(require_user)])


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        **AUTH_ERROR_RESPONSES,
        400: {"model": ErrorResponse, "description": "invalid_body"},
        503: {"model": ErrorResponse, "description": "<provider>_not_configured"},
        500: {"model": ErrorResponse, "description": "chat_error"},
    },
)
async def chat(
    chat_request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service)
):
    """
    Reply to the latest user turn of a conversation.

    Args:
        chat_request: ChatRequest containing:
            - messages: List[ChatTurn] - Conversation so far, oldest first
            - language: Optional[str] - Reply language code (e.g. "es")

    Returns:
        ChatResponse containing:
            - reply: str - Assistant reply text

    Context is retrieved from the document store for the latest user turn when
    available; retrieval problems never fail the request.

    Raises:
        ApiError: 503 if no completion provider is configured,
                  500 chat_error if the completion call fails
    """
    messages = [turn.model_dump() for turn in chat_request.messages]
    try:
        reply = await chat_service.reply(messages, chat_request.language)
    except ApiError:
        raise
    except LLMError as e:
        raise ApiError(str(e), error_code="chat_error", status_code=500)
    except Exception as e:
        logger.error(f"Unexpected chat error: {e}", exc_info=True)
        raise ApiError("Failed to generate a reply", error_code="chat_error", status_code=500)
    return ChatResponse(reply=reply)
