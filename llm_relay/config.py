import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()

PACKAGE_DIR = Path(__file__).parent


def _env(name: str, default: Optional[str] = None):
    return lambda: os.getenv(name, default)


class Settings(BaseModel):
    llm_provider: str = Field(default_factory=_env("LLM_PROVIDER", "openai"))
    openai_api_key: Optional[str] = Field(default_factory=_env("OPENAI_API_KEY"))
    anthropic_api_key: Optional[str] = Field(default_factory=_env("ANTHROPIC_API_KEY"))

    openai_api_url: str = Field(
        default_factory=_env("OPENAI_API_URL", "https://api.openai.com/v1/chat/completions")
    )
    anthropic_api_url: str = Field(
        default_factory=_env("ANTHROPIC_API_URL", "https://api.anthropic.com/v1/messages")
    )
    openai_model: str = Field(default_factory=_env("OPENAI_MODEL", "gpt-3.5-turbo"))
    anthropic_model: str = Field(default_factory=_env("ANTHROPIC_MODEL", "claude-3-haiku-20240307"))
    anthropic_version: str = Field(default_factory=_env("ANTHROPIC_VERSION", "2023-06-01"))
    # Unset means no timeout at all
    upstream_timeout: Optional[float] = Field(
        default_factory=lambda: float(os.environ["UPSTREAM_TIMEOUT"]) if os.getenv("UPSTREAM_TIMEOUT") else None
    )

    host: str = Field(default_factory=_env("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    log_file: str = Field(default_factory=_env("LOG_FILE", "logs/server.log"))
    static_dir: str = Field(default_factory=_env("STATIC_DIR", str(PACKAGE_DIR / "web" / "static")))
    debug: bool = Field(default_factory=lambda: os.getenv("DEBUG_LOGGING", "false").lower() == "true")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
