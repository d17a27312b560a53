"""Request bodies for the Gemini REST endpoints.

Bodies are Pydantic models serialized by alias, so field names follow
Python conventions while the wire format keeps Gemini's camelCase keys.
Unset optional fields are dropped from the JSON.
"""

import base64
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.gemini.catalog import Capability, ModelDescriptor

DEFAULT_IMAGE_PROMPT = "Generate a professional business image"
REFERENCE_IMAGE_TEXT = "Here is the attached image for reference:"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys and without unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Attachment(BaseModel):
    """A file uploaded alongside a chat message.

    Attributes:
        data: Raw file bytes.
        mime_type: Content type reported by the client.
        filename: Original filename, if any.
    """

    data: bytes
    mime_type: str = "application/octet-stream"
    filename: str | None = None

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


class EncodedImage(_WireModel):
    bytes_base64_encoded: str = Field(alias="bytesBase64Encoded")


class InlineData(_WireModel):
    mime_type: str = Field(alias="mimeType")
    data: str


class Part(_WireModel):
    """One part of a content block.

    ``image`` is only set for the reference-image part sent to
    image-generation models; Gemini's documented part shape has no such field.
    """

    text: str | None = None
    inline_data: InlineData | None = Field(default=None, alias="inlineData")
    image: EncodedImage | None = None


class Content(_WireModel):
    parts: list[Part]


class SystemInstruction(_WireModel):
    parts: list[Part]


class GenerateContentRequest(_WireModel):
    """Body for the generateContent endpoint."""

    contents: list[Content]
    system_instruction: SystemInstruction | None = Field(
        default=None, alias="systemInstruction"
    )


class ImagePrompt(_WireModel):
    text: str
    image: EncodedImage | None = None


class GenerateImageRequest(_WireModel):
    """Body for the generateImage endpoint."""

    prompt: ImagePrompt


def build_image_request(
    user_text: str, attachment: Attachment | None = None
) -> GenerateImageRequest:
    """Build a generateImage body.

    Args:
        user_text: Prompt from the latest chat message.
        attachment: Optional image to embed as base64 prompt input.

    Returns:
        The request body.
    """
    prompt = ImagePrompt(text=user_text or DEFAULT_IMAGE_PROMPT)
    if attachment is not None:
        prompt.image = EncodedImage(bytes_base64_encoded=attachment.to_base64())
    return GenerateImageRequest(prompt=prompt)


def build_content_request(
    user_text: str,
    descriptor: ModelDescriptor,
    attachment: Attachment | None = None,
    system_instruction: str | None = None,
) -> GenerateContentRequest:
    """Build a generateContent body.

    The attachment is sent as inline data to image-analysis models and as a
    reference-image part to image-generation models. Models declaring
    neither capability ignore the attachment.

    Args:
        user_text: Text of the latest chat message.
        descriptor: Capability table entry for the target model.
        attachment: Optional uploaded file.
        system_instruction: Optional system prompt.

    Returns:
        The request body.
    """
    parts = [Part(text=user_text)]

    if attachment is not None:
        encoded = attachment.to_base64()
        if descriptor.supports(Capability.IMAGE_ANALYSIS):
            parts.append(
                Part(inline_data=InlineData(mime_type=attachment.mime_type, data=encoded))
            )
        elif descriptor.supports(Capability.IMAGE_GENERATION):
            parts.append(
                Part(
                    text=REFERENCE_IMAGE_TEXT,
                    image=EncodedImage(bytes_base64_encoded=encoded),
                )
            )

    request = GenerateContentRequest(contents=[Content(parts=parts)])
    if system_instruction:
        request.system_instruction = SystemInstruction(
            parts=[Part(text=system_instruction)]
        )
    return request
