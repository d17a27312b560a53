"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with markdown and generated images
    - Model selection from the supported model catalogue
    - Single-file attachment per message

Contains minimal business logic. Delegates all operations to the API.
"""
