"""
Chat service - retrieval-augmented reply to a conversation
"""

import logging
from typing import List, Dict, Optional
from domain.chat.prompt import build_system_prompt
from domain.llm.base import BaseLLMClient, CompletionOptions
from domain.llm.factory import not_configured_error
from services.base import BaseService
from services.retrieval_service import RetrievalService
from core.config import settings

logger = logging.getLogger(__name__)


def latest_user_message(messages: List[Dict[str, str]]) -> Optional[str]:
    """Content of the last turn whose role is "user" (the turn being answered)"""
    for message in reversed(messages):
        if message.get("role") == "user":
            return message.get("content")
    return None


class ChatService(BaseService):
    """
    Orchestrates one chat request:
    retrieve context for the latest user turn → assemble system prompt → complete.

    Each external dependency is called at most once. Retrieval is advisory;
    completion is not.
    """

    def __init__(
        self,
        retrieval_service: RetrievalService,
        llm_client: Optional[BaseLLMClient] = None,
        llm_provider: Optional[str] = None,
        completion_options: Optional[CompletionOptions] = None,
    ):
        self.retrieval_service = retrieval_service
        self.llm_client = llm_client
        self.llm_provider = (llm_provider or settings.llm_provider).lower()
        self.completion_options = completion_options

    def _require_llm_client(self) -> BaseLLMClient:
        if self.llm_client is None:
            raise not_configured_error(self.llm_provider)
        return self.llm_client

    async def reply(
        self,
        messages: List[Dict[str, str]],
        language: Optional[str] = None,
    ) -> str:
        """
        Answer the latest user turn of a conversation.

        Args:
            messages: Conversation turns, oldest first ({"role", "content"})
            language: Optional language code for the reply

        Returns:
            Reply text ("" if the provider returned no content)

        Raises:
            ConfigurationError: no completion provider configured (checked before any call)
            LLMError: the completion call failed
        """
        llm_client = self._require_llm_client()

        query = latest_user_message(messages)
        context = await self.retrieval_service.retrieve_context(query) if query else None

        system_prompt = build_system_prompt(language, context)
        conversation = [{"role": "system", "content": system_prompt}, *messages]

        logger.info(
            f"Chat completion: {len(messages)} turns, language={language or 'auto'}, "
            f"context={'yes' if context else 'no'}"
        )
        return await llm_client.complete(conversation, self.completion_options)
