"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ChatMessage: Individual message in the submitted history
    - AssistantMessage: Reply message, optionally carrying an image
    - ChatResponse: Outgoing chat response
    - ErrorResponse: Error body for failed requests
    - ModelInfo / ModelListResponse: Model catalogue entries
"""

from src.models.schemas import (
    AssistantMessage,
    ChatHistory,
    ChatMessage,
    ChatResponse,
    ErrorResponse,
    ModelInfo,
    ModelListResponse,
)

__all__ = [
    "AssistantMessage",
    "ChatHistory",
    "ChatMessage",
    "ChatResponse",
    "ErrorResponse",
    "ModelInfo",
    "ModelListResponse",
]
