"""Chat service: one inbound chat request, one Gemini call.

Resolves the model from the capability table, builds the endpoint-specific
body, calls Gemini and normalizes the reply into a ChatResponse.
"""

import logging
from collections.abc import Mapping

import httpx

from src.gemini.catalog import (
    SUPPORTED_MODELS,
    Endpoint,
    ModelDescriptor,
    get_model_descriptor,
)
from src.gemini.client import GeminiClient, extract_image, extract_text
from src.gemini.config import GeminiConfig, get_gemini_config
from src.gemini.errors import ConfigurationError
from src.gemini.payloads import Attachment, build_content_request, build_image_request
from src.models.schemas import AssistantMessage, ChatHistory, ChatMessage, ChatResponse

logger = logging.getLogger(__name__)

GENERATED_IMAGE_TEXT = "Here's the generated image:"
GENERATED_IMAGE_MIME_TYPE = "image/png"


def parse_history(raw_messages: str) -> list[ChatMessage]:
    """Decode the JSON-encoded message history from the form.

    Raises:
        pydantic.ValidationError: If the JSON or a message is malformed.
    """
    return ChatHistory.validate_json(raw_messages)


class ChatService:
    """Serves chat requests against the Gemini API."""

    def __init__(
        self,
        config: GeminiConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        models: Mapping[str, ModelDescriptor] = SUPPORTED_MODELS,
    ) -> None:
        """Initialize the chat service.

        Args:
            config: Optional Gemini configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport for the outbound call.
            models: Capability table used to resolve model ids.
        """
        self._config = config or get_gemini_config()
        self._client = GeminiClient(self._config, transport=transport)
        self._models = models

    async def chat(
        self,
        model_id: str,
        raw_messages: str,
        attachment: Attachment | None = None,
    ) -> ChatResponse:
        """Answer the latest message of a conversation.

        Args:
            model_id: Requested model identifier.
            raw_messages: JSON array of ChatMessage objects.
            attachment: Optional uploaded file.

        Returns:
            ChatResponse holding a single assistant message.

        Raises:
            ConfigurationError: If no API key is configured.
            UnknownModelError: If the model is not supported.
            UpstreamError: If Gemini rejects the request.
            ProviderResponseError: If an image reply carries no image.
        """
        if not self._config.api_key:
            logger.error("GEMINI_API_KEY is not configured")
            raise ConfigurationError("Server configuration error: Missing API key")

        history = parse_history(raw_messages)
        user_text = history[-1].content if history else ""

        descriptor = get_model_descriptor(model_id, self._models)
        logger.info(
            f"Chat request for {descriptor.id} "
            f"({len(history)} messages, attachment={attachment is not None})"
        )

        if descriptor.endpoint is Endpoint.GENERATE_IMAGE:
            body = build_image_request(user_text, attachment)
            data = await self._client.generate(descriptor, body)
            return ChatResponse(
                messages=[
                    AssistantMessage(
                        content=GENERATED_IMAGE_TEXT,
                        image=extract_image(data),
                        mime_type=GENERATED_IMAGE_MIME_TYPE,
                    )
                ]
            )

        body = build_content_request(
            user_text,
            descriptor,
            attachment,
            system_instruction=self._config.system_instruction,
        )
        data = await self._client.generate(descriptor, body)
        return ChatResponse(messages=[AssistantMessage(content=extract_text(data))])


def get_chat_service() -> ChatService:
    """Create a chat service bound to the current environment.

    Built per request so configuration changes take effect without a
    restart; construction does no I/O.

    Returns:
        A ChatService instance.

    Raises:
        ConfigurationError: If the environment holds invalid settings.
    """
    try:
        config = get_gemini_config()
    except ValueError as e:
        logger.error(f"Invalid Gemini configuration: {e}")
        raise ConfigurationError("Server configuration error: Invalid settings") from e
    return ChatService(config)
