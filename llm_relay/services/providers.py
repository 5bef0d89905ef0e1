"""
LLM provider adapters

Each provider maps a provider-agnostic ChatRequest onto its upstream HTTP
request shape and maps the upstream response back into the canonical
{choices: [{message: {content}}]} shape.
"""

import json
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from ..config import Settings
from ..exceptions import UpstreamError
from ..models.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)


class ProviderKind(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"

    @classmethod
    def from_setting(cls, value: Optional[str]) -> "ProviderKind":
        """Anything other than 'anthropic' selects OpenAI"""
        normalized = (value or "").strip().lower()
        if normalized == cls.ANTHROPIC.value:
            return cls.ANTHROPIC
        if normalized != cls.OPENAI.value:
            logger.warning(f"Unknown LLM_PROVIDER '{value}', falling back to openai")
        return cls.OPENAI


class LLMProvider:
    """Base class for upstream LLM providers"""

    kind: ProviderKind

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    @property
    def url(self) -> str:
        raise NotImplementedError

    def build_headers(self) -> Dict[str, str]:
        raise NotImplementedError

    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        raise NotImplementedError

    def parse_response(self, body: Any) -> Dict[str, Any]:
        raise NotImplementedError

    async def send(self, request: ChatRequest) -> Dict[str, Any]:
        """
        Send a single request upstream and return the canonical response

        Raises:
            UpstreamError: on network failure, non-2xx status or an
                unusable response body
        """
        payload = self.build_payload(request)
        if self.settings.debug:
            logger.debug(f"{self.kind.value} payload: {json.dumps(payload)[:500]}")

        timeout = httpx.Timeout(self.settings.upstream_timeout)
        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
                response = await client.post(self.url, headers=self.build_headers(), json=payload)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamError(_error_body(e.response), status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            raise UpstreamError(str(e) or type(e).__name__) from e
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from {self.kind.value}: {e}") from e

        return self.parse_response(body)


class OpenAIProvider(LLMProvider):
    """OpenAI chat-completions API; its response already has the canonical shape"""

    kind = ProviderKind.OPENAI

    @property
    def url(self) -> str:
        return self.settings.openai_api_url

    def build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.openai_api_key or ''}",
        }

    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        if request.messages is not None and not isinstance(request.messages, list):
            raise UpstreamError(f"messages must be a list, got {type(request.messages).__name__}")

        messages: List[Any] = [{"role": "system", "content": request.system_prompt}]
        messages.extend(request.messages or [])
        return {
            "model": self.settings.openai_model,
            "messages": messages,
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
        }

    def parse_response(self, body: Any) -> Dict[str, Any]:
        return body


class AnthropicProvider(LLMProvider):
    """Anthropic messages API; first content block's text becomes the single choice"""

    kind = ProviderKind.ANTHROPIC

    @property
    def url(self) -> str:
        return self.settings.anthropic_api_url

    def build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.settings.anthropic_api_key or "",
            "anthropic-version": self.settings.anthropic_version,
        }

    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"model": self.settings.anthropic_model}
        # Keys the client left out are omitted; explicit nulls are forwarded
        if "system_prompt" in request.model_fields_set:
            payload["system"] = request.system_prompt
        if "messages" in request.model_fields_set:
            payload["messages"] = request.messages
        payload["max_tokens"] = request.max_tokens
        payload["temperature"] = request.temperature
        return payload

    def parse_response(self, body: Any) -> Dict[str, Any]:
        content = body.get("content") if isinstance(body, dict) else None
        if not content:
            raise UpstreamError("Anthropic response contained no content blocks")

        first_block = content[0]
        text = first_block.get("text") if isinstance(first_block, dict) else None
        if not isinstance(text, str):
            raise UpstreamError("Anthropic response's first content block has no text")

        return ChatResponse.from_text(text).model_dump()


PROVIDERS = {
    ProviderKind.OPENAI: OpenAIProvider,
    ProviderKind.ANTHROPIC: AnthropicProvider,
}


def get_provider(kind: ProviderKind, settings: Settings,
                 transport: Optional[httpx.AsyncBaseTransport] = None) -> LLMProvider:
    return PROVIDERS[kind](settings, transport=transport)


def _error_body(response: httpx.Response) -> Any:
    """Upstream error payload: parsed JSON when possible, raw text otherwise"""
    try:
        return response.json()
    except ValueError:
        return response.text
