"""Gemini Chat - a chat gateway and web UI for Google's Gemini models.

Combines FastAPI for the HTTP API, httpx for the Gemini REST call,
NiceGUI for the chat page, and Pydantic for data validation.

Components:
    - api: HTTP endpoints and error rendering
    - gemini: Capability table, request bodies and REST client
    - ui: Web interface for chat interactions
    - models: Request/response schemas
"""

__version__ = "0.1.0"
