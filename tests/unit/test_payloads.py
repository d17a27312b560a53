"""Unit tests for Gemini request body builders."""

import base64

import pytest_check as check

from src.gemini.catalog import SUPPORTED_MODELS, Capability, Endpoint, ModelDescriptor
from src.gemini.payloads import (
    DEFAULT_IMAGE_PROMPT,
    REFERENCE_IMAGE_TEXT,
    Attachment,
    build_content_request,
    build_image_request,
)

FILE_BYTES = b"\xff\xd8\xff\xe0fake-jpeg"
ENCODED = base64.b64encode(FILE_BYTES).decode()

ANALYSIS_MODEL = SUPPORTED_MODELS["gemini-1.5-flash"]
GENERATION_MODEL = SUPPORTED_MODELS["gemini-2.5-pro-preview-05-06"]
TEXT_ONLY_MODEL = ModelDescriptor(
    id="text-only",
    display_name="Text Only",
    capabilities=frozenset({Capability.TEXT}),
    endpoint=Endpoint.GENERATE_CONTENT,
)


def jpeg() -> Attachment:
    return Attachment(data=FILE_BYTES, mime_type="image/jpeg", filename="a.jpg")


class TestBuildContentRequest:
    """Tests for generateContent bodies."""

    def test_text_only(self) -> None:
        """Without attachment the body holds one text part."""
        body = build_content_request("hello", ANALYSIS_MODEL).to_wire()

        assert body == {"contents": [{"parts": [{"text": "hello"}]}]}

    def test_system_instruction(self) -> None:
        """System instruction is serialized under its camelCase key."""
        body = build_content_request(
            "hello", ANALYSIS_MODEL, system_instruction="Be brief."
        ).to_wire()

        assert body["systemInstruction"] == {"parts": [{"text": "Be brief."}]}

    def test_empty_text_is_kept(self) -> None:
        """An empty message still produces a text part."""
        body = build_content_request("", ANALYSIS_MODEL).to_wire()

        assert body["contents"][0]["parts"] == [{"text": ""}]

    def test_image_analysis_appends_inline_data(self) -> None:
        """Image-analysis models receive the file as inline data."""
        body = build_content_request("what is this?", ANALYSIS_MODEL, jpeg()).to_wire()

        parts = body["contents"][0]["parts"]
        check.equal(len(parts), 2)
        check.equal(parts[1], {"inlineData": {"mimeType": "image/jpeg", "data": ENCODED}})

    def test_image_generation_appends_reference_part(self) -> None:
        """Image-generation models receive a text part carrying an image field."""
        body = build_content_request("restyle", GENERATION_MODEL, jpeg()).to_wire()

        parts = body["contents"][0]["parts"]
        check.equal(len(parts), 2)
        check.equal(
            parts[1],
            {"text": REFERENCE_IMAGE_TEXT, "image": {"bytesBase64Encoded": ENCODED}},
        )
        check.is_not_in("inlineData", parts[1])

    def test_other_models_ignore_attachment(self) -> None:
        """Models without image capabilities drop the file."""
        body = build_content_request("hi", TEXT_ONLY_MODEL, jpeg()).to_wire()

        assert body["contents"][0]["parts"] == [{"text": "hi"}]


class TestBuildImageRequest:
    """Tests for generateImage bodies."""

    def test_prompt_text(self) -> None:
        """User text becomes the prompt."""
        assert build_image_request("a red fox").to_wire() == {"prompt": {"text": "a red fox"}}

    def test_default_prompt_for_empty_text(self) -> None:
        """Empty text falls back to the default prompt."""
        body = build_image_request("").to_wire()

        assert body["prompt"]["text"] == DEFAULT_IMAGE_PROMPT

    def test_attachment_embedded_as_base64(self) -> None:
        """An attached file is embedded in the prompt."""
        body = build_image_request("edit this", jpeg()).to_wire()

        assert body["prompt"]["image"] == {"bytesBase64Encoded": ENCODED}


def test_attachment_base64_round_trips_bytes() -> None:
    """Encoded attachment decodes back to the original bytes."""
    assert base64.b64decode(jpeg().to_base64()) == FILE_BYTES
