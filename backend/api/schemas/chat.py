"""
Request/Response schemas for chat
"""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional


class ChatTurn(BaseModel):
    """One turn of a conversation"""
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    """Request model for the chat endpoint"""
    messages: List[ChatTurn] = Field(
        ...,
        min_length=1,
        description="Conversation so far, oldest first. The last 'user' turn is the one answered.",
    )
    language: Optional[str] = Field(
        default=None,
        description="Reply language as a short code, e.g. 'es'. Defaults to the user's language.",
    )

    class Config:
        json_schema_extra = {
            "example": {
                "messages": [{"role": "user", "content": "What are my rights if detained?"}],
                "language": "en",
            }
        }


class ChatResponse(BaseModel):
    """Response model for the chat endpoint"""
    reply: str
