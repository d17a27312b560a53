"""Chat endpoint forwarding messages to Gemini.

Accepts a multipart form with the model id, the JSON-encoded history and an
optional attachment. Every failure leaves the route as a ChatError, which
the application renders as an error body.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.gemini.catalog import SUPPORTED_MODELS
from src.gemini.errors import ChatError
from src.gemini.payloads import Attachment
from src.gemini.service import ChatService, get_chat_service
from src.models.schemas import ChatResponse, ErrorResponse, ModelInfo, ModelListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


async def _read_attachment(file: UploadFile | None) -> Attachment | None:
    """Read an optional upload into an Attachment.

    Browsers submit an empty part with no filename when nothing is selected,
    which is treated as no attachment.
    """
    if file is None or not file.filename:
        return None

    data = await file.read()
    return Attachment(
        data=data,
        mime_type=file.content_type or "application/octet-stream",
        filename=file.filename,
    )


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(
    model: str = Form(""),
    messages: str = Form("[]"),
    file: UploadFile | None = File(None),
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """Answer the latest chat message with the selected Gemini model.

    Args:
        model: Model identifier from the capability table.
        messages: JSON array of ``{role, content}`` objects.
        file: Optional attachment (multipart/form-data).
        service: Chat service dependency.

    Returns:
        ChatResponse with a single assistant message.

    Raises:
        400: Unknown model.
        500: Missing API key, Gemini error, or any unexpected failure.
    """
    try:
        attachment = await _read_attachment(file)
        return await service.chat(model, messages, attachment)
    except ChatError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error handling chat request for {model!r}")
        raise ChatError(str(e) or "Request failed") from e


@router.get("/models", response_model=ModelListResponse)
async def list_models() -> ModelListResponse:
    """List the supported models and their declared capabilities."""
    return ModelListResponse(
        models=[
            ModelInfo(
                id=descriptor.id,
                name=descriptor.display_name,
                capabilities=sorted(c.value for c in descriptor.capabilities),
                endpoint=descriptor.endpoint.value,
                version=descriptor.api_version,
            )
            for descriptor in SUPPORTED_MODELS.values()
        ]
    )
