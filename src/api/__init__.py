"""FastAPI endpoints for the Gemini chat gateway.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Forward a chat message (and attachment) to Gemini
    - GET /api/models: Supported models and their capabilities
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
