"""Gemini integration: capability table, request bodies and REST client.

Responsibilities:
    - Static model capability table
    - Endpoint-specific request body construction
    - The single outbound REST call and response extraction
    - Chat request orchestration for the HTTP layer
"""

from src.gemini.catalog import (
    SUPPORTED_MODELS,
    Capability,
    Endpoint,
    ModelDescriptor,
    get_model_descriptor,
)
from src.gemini.config import GeminiConfig, get_gemini_config
from src.gemini.errors import (
    ChatError,
    ConfigurationError,
    ProviderResponseError,
    UnknownModelError,
    UpstreamError,
)
from src.gemini.service import ChatService, get_chat_service

__all__ = [
    "SUPPORTED_MODELS",
    "Capability",
    "ChatError",
    "ChatService",
    "ConfigurationError",
    "Endpoint",
    "GeminiConfig",
    "ModelDescriptor",
    "ProviderResponseError",
    "UnknownModelError",
    "UpstreamError",
    "get_chat_service",
    "get_gemini_config",
    "get_model_descriptor",
]
