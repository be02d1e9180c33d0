"""
OpenAI LLM client implementation
"""

import logging
from typing import List, Dict, Any, Optional
from openai import AsyncOpenAI, OpenAIError

from domain.llm.base import BaseLLMClient, CompletionOptions, provider_error_message
from core.exceptions import LLMError

logger = logging.getLogger(__name__)


class OpenAIClient(BaseLLMClient):
    """OpenAI LLM client implementation"""

    provider = "openai"

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
            # No SDK retries: one provider call per request
            self.client = AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        except OpenAIError as e:
            raise LLMError(f"Failed to initialize OpenAI client: {e}")

    async def chat_completion(
        self,
        messages: List[Dict[str, Any]],
        options: CompletionOptions,
    ) -> Any:
        """Make a chat completion request to OpenAI"""
        try:
            return await self.client.chat.completions.create(
                model=options.model,
                messages=messages,
                temperature=options.temperature,
                max_tokens=options.max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"Error calling OpenAI API: {e}")
            raise LLMError(provider_error_message(e))

    def extract_text_content(self, response: Any) -> str:
        """Extract text content from OpenAI response"""
        if not getattr(response, "choices", None):
            return ""
        message = response.choices[0].message
        return (message.content if message else None) or ""

    async def close(self) -> None:
        await self.client.close()
