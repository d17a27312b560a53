"""Gemini configuration with environment variable loading.

Pydantic-based settings for the Gemini REST client. The API key is
optional at construction time so that a missing credential surfaces as a
per-request configuration error instead of a startup crash.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_SYSTEM_INSTRUCTION = (
    "You are an expert business advisor. Provide detailed, actionable responses."
)


def _timeout_from_env() -> float | None:
    raw = os.getenv("GEMINI_TIMEOUT", "").strip()
    return float(raw) if raw else None


class GeminiConfig(BaseModel):
    """Configuration for the Gemini REST client.

    Attributes:
        api_key: Provider API key, passed as the ``key`` query parameter.
        base_url: Root URL of the generative language API.
        system_instruction: Instruction sent with every generateContent call.
        timeout: Outbound request timeout in seconds (None disables it).
    """

    api_key: str | None = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY"),
        description="API key for the Gemini API",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_BASE_URL", DEFAULT_BASE_URL),
        description="Generative language API root URL",
    )
    system_instruction: str = Field(
        default_factory=lambda: os.getenv(
            "GEMINI_SYSTEM_INSTRUCTION", DEFAULT_SYSTEM_INSTRUCTION
        ),
        description="System instruction for generateContent requests",
    )
    timeout: float | None = Field(
        default_factory=_timeout_from_env,
        gt=0,
        validate_default=True,
        description="Outbound request timeout in seconds",
    )

    @field_validator("api_key")
    @classmethod
    def normalize_api_key(cls, v: str | None) -> str | None:
        """Strip whitespace and treat blank keys as missing."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Remove trailing slashes so URL templating stays predictable."""
        return v.rstrip("/")


def get_gemini_config() -> GeminiConfig:
    """Create Gemini configuration from environment.

    Returns:
        Configured GeminiConfig instance.
    """
    return GeminiConfig()
