from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class ChatMessage(BaseModel):
    """A single chat message in the conversation.

    Attributes:
        role: The speaker identifier (user or assistant).
        content: The message text.
    """

    role: Literal["user", "assistant"]
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def null_content_as_empty(cls, v: str | None) -> str:
        """Treat a null content as an empty message."""
        return "" if v is None else v


ChatHistory = TypeAdapter(list[ChatMessage])


class AssistantMessage(BaseModel):
    """Assistant reply returned to the chat UI.

    Attributes:
        role: Always "assistant".
        content: Reply text.
        image: Base64-encoded generated image, if any.
        mime_type: MIME type of ``image``.
    """

    model_config = ConfigDict(populate_by_name=True)

    role: Literal["assistant"] = "assistant"
    content: str
    image: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")


class ChatResponse(BaseModel):
    """Response body for POST /api/chat."""

    messages: list[AssistantMessage]


class ErrorResponse(BaseModel):
    """Error body returned for any failed request."""

    error: str


class ModelInfo(BaseModel):
    """Public view of a capability table entry."""

    id: str
    name: str
    capabilities: list[str]
    endpoint: str
    version: str


class ModelListResponse(BaseModel):
    """Response body for GET /api/models."""

    models: list[ModelInfo]
