"""
Chat prompt assembly
"""

from domain.chat.prompt import build_system_prompt, format_passages, resolve_language_name

__all__ = [
    "build_system_prompt",
    "format_passages",
    "resolve_language_name",
]
