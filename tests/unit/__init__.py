"""Unit tests for individual components in isolation.

Coverage:
    - gemini/: Capability table, request bodies, REST client, configuration
    - ui/: Chat page helpers and API client
"""
