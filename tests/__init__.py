"""Test package for Gemini Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP endpoint tests against the FastAPI app

Outbound Gemini calls are served by httpx.MockTransport; no test needs
network access or an API key. Leverages pytest with pytest-check for soft
assertions.
"""
