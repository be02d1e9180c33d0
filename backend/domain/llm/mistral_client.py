"""
Mistral LLM client implementation (plain HTTPS, no SDK)
"""

import logging
from typing import List, Dict, Any, Optional
import httpx

from domain.llm.base import BaseLLMClient, CompletionOptions
from core.exceptions import LLMError

logger = logging.getLogger(__name__)

MISTRAL_CHAT_URL = "https://api.mistral.ai/v1/chat/completions"


class MistralClient(BaseLLMClient):
    """Mistral chat completions over httpx"""

    provider = "mistral"

    def __init__(
        self,
        model: str,
        max_tokens: int,
        temperature: float = 0.3,
        api_key: Optional[str] = None,
        timeout: float = 60.0,
        api_url: str = MISTRAL_CHAT_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(model, max_tokens, temperature)
        if not api_key:
            raise LLMError("Mistral API key not set")
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                }
            )
        return self._client

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            err = body.get("error")
            if isinstance(err, dict) and err.get("message"):
                return str(err["message"])
            if body.get("message"):
                return str(body["message"])
        return f"Mistral API error: {response.status_code} {response.reason_phrase}"

    async def chat_completion(
        self,
        messages: List[Dict[str, Any]],
        options: CompletionOptions,
    ) -> Any:
        """Make a chat completion request to Mistral"""
        client = await self._get_client()
        try:
            response = await client.post(
                self.api_url,
                json={
                    "model": options.model,
                    "messages": messages,
                    "temperature": options.temperature,
                    "max_tokens": options.max_tokens,
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Error calling Mistral API: {e}")
            raise LLMError(f"Mistral API call failed: {e}")

        if response.is_error:
            message = self._error_message(response)
            logger.error(f"Mistral API error {response.status_code}: {message}")
            raise LLMError(message)

        try:
            return response.json()
        except ValueError as e:
            raise LLMError(f"Mistral API returned invalid JSON: {e}")

    def extract_text_content(self, response: Any) -> str:
        """Extract text content from Mistral JSON response"""
        if not isinstance(response, dict):
            return ""
        choices = response.get("choices") or []
        if not choices or not isinstance(choices[0], dict):
            return ""
        message = choices[0].get("message") or {}
        return message.get("content") or ""

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
