"""
Abstract base class for LLM clients
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional

from pydantic import BaseModel, Field


class CompletionOptions(BaseModel):
    """Per-call completion settings; unset model means the client's default"""
    model: Optional[str] = None
    temperature: float = Field(0.3, ge=0.0, le=1.0)
    max_tokens: int = Field(1000, gt=0)


def provider_error_message(error: Exception) -> str:
    """
    Best-effort extraction of the provider's own error message.

    SDK errors carry the decoded JSON body ({"message": ...} or
    {"error": {"message": ...}}); anything else falls back to str(error).
    """
    body = getattr(error, "body", None)
    if isinstance(body, dict):
        err = body.get("error", body)
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str) and err:
            return err
    return getattr(error, "message", None) or str(error)


class BaseLLMClient(ABC):
    """Abstract base class for all LLM clients"""

    provider: str = ""

    def __init__(self, model: str, max_tokens: int, temperature: float = 0.3):
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    def resolve_options(self, options: Optional[CompletionOptions] = None) -> CompletionOptions:
        """Fill unset fields from the client defaults. An explicit temperature of 0 is kept."""
        if options is None:
            return CompletionOptions(
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        return CompletionOptions(
            model=options.model or self.model,
            temperature=options.temperature,
            max_tokens=options.max_tokens,
        )

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[Dict[str, Any]],
        options: CompletionOptions,
    ) -> Any:
        """
        Make a chat completion request to the LLM.

        Args:
            messages: List of message dictionaries with 'role' and 'content'
            options: Resolved completion options

        Returns:
            LLM response object (provider-specific)

        Raises:
            LLMError: If the request fails
        """
        pass

    @abstractmethod
    def extract_text_content(self, response: Any) -> str:
        """
        Extract text content from LLM response.

        Args:
            response: LLM response object (provider-specific)

        Returns:
            Text content of the first choice, "" if absent
        """
        pass

    async def complete(
        self,
        messages: List[Dict[str, Any]],
        options: Optional[CompletionOptions] = None,
    ) -> str:
        """Send the conversation and return the reply text"""
        response = await self.chat_completion(messages, self.resolve_options(options))
        return self.extract_text_content(response)

    async def close(self) -> None:
        """Release HTTP resources"""
        pass
