"""Static capability table for the supported Gemini models.

Each model id maps to an immutable descriptor naming the REST endpoint it is
called through and the input modalities it declares. The table is built once
at import and never mutated.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict

from src.gemini.errors import UnknownModelError


class Capability(str, Enum):
    """Input/output modalities a model declares."""

    TEXT = "text"
    IMAGE_ANALYSIS = "image-analysis"
    IMAGE_GENERATION = "image-generation"
    AUDIO_ANALYSIS = "audio-analysis"
    VIDEO_ANALYSIS = "video-analysis"


class Endpoint(str, Enum):
    """Gemini REST method invoked after the colon in the model URL."""

    GENERATE_CONTENT = "generateContent"
    GENERATE_IMAGE = "generateImage"


class ModelDescriptor(BaseModel):
    """Immutable metadata for one supported model.

    Attributes:
        id: Model identifier used in the request URL.
        display_name: Human-readable name shown in the UI.
        capabilities: Declared modalities.
        endpoint: REST method used for this model.
        api_version: API version path segment.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    capabilities: frozenset[Capability]
    endpoint: Endpoint
    api_version: str = "v1beta"

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities


def _descriptor(
    model_id: str,
    display_name: str,
    *capabilities: Capability,
    endpoint: Endpoint = Endpoint.GENERATE_CONTENT,
) -> tuple[str, ModelDescriptor]:
    return model_id, ModelDescriptor(
        id=model_id,
        display_name=display_name,
        capabilities=frozenset(capabilities),
        endpoint=endpoint,
    )


SUPPORTED_MODELS: MappingProxyType[str, ModelDescriptor] = MappingProxyType(
    dict(
        [
            # Flash models
            _descriptor(
                "gemini-1.5-flash",
                "Gemini 1.5 Flash",
                Capability.TEXT,
                Capability.IMAGE_ANALYSIS,
            ),
            _descriptor(
                "gemini-2.0-flash",
                "Gemini 2.0 Flash",
                Capability.TEXT,
                Capability.IMAGE_ANALYSIS,
                Capability.VIDEO_ANALYSIS,
            ),
            # Pro models
            _descriptor(
                "gemini-1.5-flash-latest",
                "Gemini 1.5 Pro",
                Capability.TEXT,
                Capability.IMAGE_ANALYSIS,
                Capability.AUDIO_ANALYSIS,
            ),
            _descriptor(
                "gemini-2.5-pro-preview-05-06",
                "Gemini 2.5 Pro",
                Capability.TEXT,
                Capability.IMAGE_GENERATION,
                Capability.VIDEO_ANALYSIS,
            ),
        ]
    )
)

DEFAULT_MODEL_ID = "gemini-2.0-flash"


def get_model_descriptor(
    model_id: str, models: Mapping[str, ModelDescriptor] = SUPPORTED_MODELS
) -> ModelDescriptor:
    """Look up a model in the capability table.

    Args:
        model_id: Identifier submitted by the client.
        models: Table to search, the supported models by default.

    Returns:
        The matching descriptor.

    Raises:
        UnknownModelError: If the id is not in the table.
    """
    try:
        return models[model_id]
    except KeyError:
        raise UnknownModelError(model_id) from None
