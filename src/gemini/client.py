"""Async REST client for the Gemini generative language API.

Issues exactly one POST per call and extracts generated text or image data
from the response. No retries and no streaming.
"""

import logging
import re
from typing import Any

import httpx

from src.gemini.catalog import ModelDescriptor
from src.gemini.config import GeminiConfig
from src.gemini.errors import ProviderResponseError, UpstreamError
from src.gemini.payloads import GenerateContentRequest, GenerateImageRequest

logger = logging.getLogger(__name__)

_API_KEY_PARAM = re.compile(r"([?&]key=)[^&\s'\"]+")


class RedactApiKeyFilter(logging.Filter):
    """Mask the ``key`` query parameter in log messages.

    httpx logs every request URL at INFO, and Gemini takes the API key as a
    query parameter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _API_KEY_PARAM.sub(r"\1REDACTED", message)
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True


logging.getLogger("httpx").addFilter(RedactApiKeyFilter())

FALLBACK_TEXT = "I couldn't generate a response. Please try again."


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def _get(value: Any, key: str) -> Any:
    if isinstance(value, dict):
        return value.get(key)
    return None


def extract_text(data: Any) -> str:
    """Pull the reply text out of a generateContent response.

    Tries ``candidates[0].content.parts[0].text`` then a top-level
    ``text`` field, falling back to a fixed apology.

    Args:
        data: Decoded JSON response.

    Returns:
        Reply text, never empty.
    """
    first_part = _first(_get(_get(_first(_get(data, "candidates")), "content"), "parts"))
    text = _get(first_part, "text") or _get(data, "text")
    if not text:
        logger.warning("No text in Gemini response, using fallback reply")
        return FALLBACK_TEXT
    return text


def extract_image(data: Any) -> str:
    """Pull base64 image bytes out of a generateImage response.

    Accepts either ``{"image": {"bytesBase64Encoded": ...}}`` or a list
    whose first element carries ``bytesBase64Encoded``.

    Args:
        data: Decoded JSON response.

    Returns:
        Base64-encoded image data.

    Raises:
        ProviderResponseError: If no image data is present.
    """
    image = _get(_get(data, "image"), "bytesBase64Encoded") or _get(
        _first(data), "bytesBase64Encoded"
    )
    if not image:
        logger.error("Gemini image response carried no image data")
        raise ProviderResponseError("No image data received from the API")
    return image


def _error_payload(response: httpx.Response) -> Any:
    try:
        return response.json().get("error")
    except (ValueError, AttributeError):
        return response.text or None


class GeminiClient:
    """Thin wrapper over ``httpx.AsyncClient`` for Gemini model calls."""

    def __init__(
        self,
        config: GeminiConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Gemini settings (key, base URL, timeout).
            transport: Optional httpx transport, e.g. a mock in tests.
        """
        self._config = config
        self._transport = transport

    def build_url(self, descriptor: ModelDescriptor) -> str:
        """Return the endpoint URL for a model, without the API key."""
        return (
            f"{self._config.base_url}/{descriptor.api_version}"
            f"/models/{descriptor.id}:{descriptor.endpoint.value}"
        )

    async def generate(
        self,
        descriptor: ModelDescriptor,
        body: GenerateContentRequest | GenerateImageRequest,
    ) -> Any:
        """POST a request body to the model's endpoint.

        Args:
            descriptor: Capability table entry for the target model.
            body: Request body for the model's endpoint.

        Returns:
            Decoded JSON response.

        Raises:
            UpstreamError: If Gemini answers with a non-success status.
        """
        url = self.build_url(descriptor)
        logger.info(f"Calling Gemini {url}")

        async with httpx.AsyncClient(
            transport=self._transport, timeout=self._config.timeout
        ) as client:
            response = await client.post(
                url,
                params={"key": self._config.api_key},
                json=body.to_wire(),
                headers={"Content-Type": "application/json"},
            )

        if not response.is_success:
            error = _error_payload(response)
            logger.error(
                "API Error Details: "
                f"status={response.status_code} "
                f"status_text={response.reason_phrase!r} "
                f"model={descriptor.id} error={error!r}"
            )
            message = _get(error, "message") or "API request failed"
            raise UpstreamError(
                message,
                status=response.status_code,
                status_text=response.reason_phrase,
                model=descriptor.id,
                error=error,
            )

        return response.json()
