"""
Groq LLM client implementation
"""

import logging
from typing import List, Dict, Any, Optional
from groq import AsyncGroq, GroqError

from domain.llm.base import BaseLLMClient, CompletionOptions, provider_error_message
from core.exceptions import LLMError

logger = logging.getLogger(__name__)


class GroqClient(BaseLLMClient):
    """Groq LLM client implementation"""

    provider = "groq"

    def __init__(
        self,
        model: str,
        max_tokens: int,
        temperature: float = 0.3,
        api_key: Optional[str] = None,
        timeout: float = 60.0,
    ):
        super().__init__(model, max_tokens, temperature)
        try:
            self.client = AsyncGroq(api_key=api_key, timeout=timeout, max_retries=0)
        except GroqError as e:
            raise LLMError(f"Failed to initialize Groq client: {e}")

    async def chat_completion(
        self,
        messages: List[Dict[str, Any]],
        options: CompletionOptions,
    ) -> Any:
        """Make a chat completion request to Groq"""
        try:
            return await self.client.chat.completions.create(
                model=options.model,
                messages=messages,
                temperature=options.temperature,
                max_tokens=options.max_tokens,
            )
        except GroqError as e:
            logger.error(f"Error calling Groq API: {e}")
            raise LLMError(provider_error_message(e))

    def extract_text_content(self, response: Any) -> str:
        """Extract text content from Groq response"""
        if not getattr(response, "choices", None):
            return ""
        message = response.choices[0].message
        return (message.content if message else None) or ""

    async def close(self) -> None:
        await self.client.close()
