"""
Chat-completion clients
"""

from domain.llm.base import BaseLLMClient, CompletionOptions
from domain.llm.factory import create_llm_client

__all__ = [
    "BaseLLMClient",
    "CompletionOptions",
    "create_llm_client",
]
