"""
Data models for the LLM relay

This module contains all Pydantic models for data validation and serialization.
"""

from .chat import ChatRequest, ChatResponse, Choice, ChoiceMessage
from .log import ClientLogEntry

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "Choice",
    "ChoiceMessage",
    "ClientLogEntry"
]
