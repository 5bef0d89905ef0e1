"""
Relay Service

Forwards chat requests to the configured LLM provider and returns the
canonical response.
"""

import time
from typing import Any, Dict, Optional

import httpx

from ..config import Settings
from ..exceptions import UpstreamError
from ..models.chat import ChatRequest
from ..utils.relay_logger import RelayLogger
from .providers import LLMProvider, ProviderKind, get_provider


class RelayService:
    """Service for relaying chat completions to a single upstream provider"""

    def __init__(self, settings: Settings, relay_logger: RelayLogger,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """Select the provider once from configuration"""
        self.settings = settings
        self.relay_logger = relay_logger
        self.kind = ProviderKind.from_setting(settings.llm_provider)
        self.provider: LLMProvider = get_provider(self.kind, settings, transport=transport)

    async def relay(self, request: ChatRequest, request_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Relay a chat request upstream

        Args:
            request: Provider-agnostic chat request
            request_id: Request identifier for log correlation

        Returns:
            Canonical chat response body

        Raises:
            UpstreamError: when the provider call fails
        """
        self.relay_logger.info(
            "RELAY",
            f"Calling {self.kind.value}",
            request_id,
            messages=len(request.messages) if isinstance(request.messages, list) else 0,
            max_tokens=request.max_tokens,
            temperature=request.temperature,
        )
        start = time.perf_counter()
        try:
            response = await self.provider.send(request)
        except UpstreamError as e:
            self.relay_logger.error(
                "RELAY",
                f"Error calling LLM API: {e.details}",
                request_id,
                provider=self.kind.value,
                upstream_status=e.status_code,
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        self.relay_logger.info("RELAY", f"{self.kind.value} responded in {duration_ms:.3f}ms", request_id)
        return response
