"""Error types raised while serving a chat request.

Each error carries the HTTP status the API layer answers with.
"""

from typing import Any


class ChatError(Exception):
    """Base class for chat request failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(ChatError):
    """Raised when the server is missing required configuration."""

    status_code = 500


class UnknownModelError(ChatError):
    """Raised when the requested model is not in the capability table."""

    status_code = 400

    def __init__(self, model_id: str) -> None:
        super().__init__("Invalid model selected")
        self.model_id = model_id


class UpstreamError(ChatError):
    """Raised when the Gemini API answers with a non-success status."""

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        status: int,
        status_text: str,
        model: str,
        error: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text
        self.model = model
        self.error = error


class ProviderResponseError(ChatError):
    """Raised when a success response lacks the expected payload."""

    status_code = 500
