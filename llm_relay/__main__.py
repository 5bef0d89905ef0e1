"""
Run the relay with uvicorn: python -m llm_relay
"""

import logging

import uvicorn

from .config import get_settings
from .main import create_app


def main():
    settings = get_settings()
    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    app = create_app(settings)
    app.state.relay_logger.info("SERVER", f"Server running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
