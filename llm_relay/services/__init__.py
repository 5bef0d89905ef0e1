"""
Services layer for the LLM relay

This module contains the business logic behind the HTTP routes.
"""

from .context_store import ContextStore
from .providers import AnthropicProvider, LLMProvider, OpenAIProvider, ProviderKind, get_provider
from .relay_service import RelayService

__all__ = [
    "ContextStore",
    "RelayService",
    "LLMProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "ProviderKind",
    "get_provider"
]
