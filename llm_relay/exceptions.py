"""
Relay error types

Handlers in main.py turn these into JSON error responses.
"""

from typing import Any, Optional


class RelayError(Exception):
    """Base class for errors surfaced to API clients"""


class UpstreamError(RelayError):
    """The selected LLM provider failed or answered with a non-2xx status"""

    def __init__(self, details: Any, status_code: Optional[int] = None):
        super().__init__(details if isinstance(details, str) else f"Upstream error ({status_code})")
        self.details = details
        self.status_code = status_code


class NotFoundError(RelayError):
    def __init__(self, message: str = "Not found"):
        super().__init__(message)
        self.message = message


class ContextNotFoundError(NotFoundError):
    def __init__(self, context_id: str):
        super().__init__("Context not found")
        self.context_id = context_id
