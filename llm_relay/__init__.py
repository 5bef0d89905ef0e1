"""
LLM Relay API

Thin HTTP relay for chat completions plus an in-memory dog context store.
"""

from .main import create_app

__version__ = "0.1.0"

__all__ = ["create_app", "__version__"]
