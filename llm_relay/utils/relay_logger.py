"""
Request logging utility

Provides structured request/response logging to the console and an
append-only log file, with consistent formatting.
"""

import itertools
import json
import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

_instance_ids = itertools.count(1)


class RelayLogger:
    """
    Structured logger writing to console and an append-only file

    Each instance gets its own logger name unless one is given, so two apps
    in the same process keep separate files. Passing the name of an existing
    RelayLogger takes over (and closes) its handlers.
    """

    def __init__(self, log_file: Optional[str] = None, name: Optional[str] = None):
        self.log_file = log_file
        if name is None:
            name = f"llm_relay.requests.{next(_instance_ids)}"
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False

        # Re-creating a logger for the same name replaces its handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT)

        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(formatter)
        self.logger.addHandler(console)

        if log_file:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def log(self,
            level: int,
            component: str,
            message: str,
            request_id: Optional[str] = None,
            **kwargs) -> None:
        """
        Log a message with optional request id and key=value context

        Args:
            level: logging level (e.g. logging.INFO)
            component: Component name (e.g. 'REQUEST', 'RELAY', 'CLIENT')
            message: Log message
            request_id: Unique request identifier
            **kwargs: Additional context to include in log
        """
        context_part = f" [{request_id}]" if request_id else ""

        context_str = ""
        if kwargs:
            context_items = [f"{k}={v}" for k, v in kwargs.items()]
            context_str = f" {' '.join(context_items)}"

        # Format: [component] [request_id] message [context]
        self.logger.log(level, f"[{component}]{context_part} {message}{context_str}")

    def info(self, component: str, message: str, request_id: Optional[str] = None, **kwargs):
        self.log(logging.INFO, component, message, request_id, **kwargs)

    def warning(self, component: str, message: str, request_id: Optional[str] = None, **kwargs):
        self.log(logging.WARNING, component, message, request_id, **kwargs)

    def error(self, component: str, message: str, request_id: Optional[str] = None, **kwargs):
        self.log(logging.ERROR, component, message, request_id, **kwargs)

    def log_request_start(self, request_id: str, method: str, url: str, headers: Mapping[str, str]):
        self.info("REQUEST", f"Request started: {method} {url}", request_id,
                  headers=json.dumps(dict(headers)))

    def log_request_finish(self, request_id: str, method: str, url: str, status_code: int, duration_ms: float):
        self.info("REQUEST", f"Request completed: {method} {url}", request_id,
                  status=status_code, duration_ms=f"{duration_ms:.3f}")

    def log_response_error(self, request_id: str, method: str, url: str, error: BaseException):
        self.error("REQUEST", f"Response error: {method} {url}", request_id,
                   error_type=type(error).__name__, error=error)

    def log_not_found(self, method: str, url: str, request_id: Optional[str] = None):
        self.warning("REQUEST", f"Endpoint not found: {method} {url}", request_id)

    def log_client(self, entry_type: Optional[str], message: Any, **kwargs):
        """Log a message shipped by the client; level follows its type"""
        level = {
            "error": logging.ERROR,
            "warn": logging.WARNING,
            "warning": logging.WARNING,
        }.get((entry_type or "").lower(), logging.INFO)
        self.log(level, "CLIENT", str(message), type=entry_type, **kwargs)

    def close(self):
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()
