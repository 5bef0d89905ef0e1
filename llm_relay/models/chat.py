"""
Chat-related data models

These models define the provider-agnostic request accepted by the relay
and the canonical response shape every provider is normalized into.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Any


class ChatRequest(BaseModel):
    """Request model for relayed chat completions"""
    model_config = ConfigDict(populate_by_name=True)

    # Fields are extracted, not validated: values are forwarded as sent and
    # defaults apply only when a key is absent
    system_prompt: Any = Field(default=None, alias="systemPrompt")
    messages: Any = None
    temperature: Any = 0.7
    max_tokens: Any = 100


class ChoiceMessage(BaseModel):
    content: str


class Choice(BaseModel):
    message: ChoiceMessage


class ChatResponse(BaseModel):
    """Canonical response: always exactly one choice"""
    choices: List[Choice]

    @classmethod
    def from_text(cls, text: str) -> "ChatResponse":
        return cls(choices=[Choice(message=ChoiceMessage(content=text))])
