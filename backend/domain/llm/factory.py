"""
Factory for creating LLM clients
"""

from typing import Dict, Optional

from domain.llm.base import BaseLLMClient
from domain.llm.groq_client import GroqClient
from domain.llm.mistral_client import MistralClient
from domain.llm.openai_client import OpenAIClient
from core.config import settings
from core.exceptions import ConfigurationError, LLMError

DEFAULT_MODELS: Dict[str, str] = {
    "openai": "gpt-4o-mini",
    "mistral": "mistral-small-latest",
    "groq": "llama-3.3-70b-versatile",
}

API_KEY_FIELDS: Dict[str, str] = {
    "openai": "openai_api_key",
    "mistral": "mistral_api_key",
    "groq": "groq_api_key",
}


def not_configured_error(provider: str) -> ConfigurationError:
    """503 error for a provider whose API key is missing"""
    return settings.missing_error(API_KEY_FIELDS[provider], f"{provider}_not_configured")


def create_llm_client(provider: Optional[str] = None, api_key: Optional[str] = None) -> BaseLLMClient:
    """
    Create an LLM client based on configuration.

    Args:
        provider: LLM provider name (overrides settings)
        api_key: API key (overrides settings)

    Returns:
        BaseLLMClient instance

    Raises:
        ConfigurationError: If the provider's API key is not set
        LLMError: If provider is not supported or client creation fails
    """
    provider = (provider or settings.llm_provider).lower()
    if provider not in API_KEY_FIELDS:
        raise LLMError(f"Unknown LLM provider: {provider}")

    api_key = api_key or settings.require(API_KEY_FIELDS[provider], f"{provider}_not_configured")

    common = dict(
        model=settings.llm_model or DEFAULT_MODELS[provider],
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
        api_key=api_key,
        timeout=settings.llm_timeout,
    )

    if provider == "openai":
        return OpenAIClient(**common)
    elif provider == "mistral":
        return MistralClient(**common)
    else:
        return GroqClient(**common)
