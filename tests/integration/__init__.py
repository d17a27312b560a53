"""Integration tests for the HTTP API working as a system.

Requests go through the real FastAPI app via ASGITransport; only the
Gemini REST API is replaced by a mock transport.
"""
