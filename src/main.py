"""Server entry point for the chat API and the NiceGUI chat page.

RUN_MODE=integrated (default) mounts the page on the API server, so both
share HOST:PORT. RUN_MODE=separate serves the API on HOST:PORT and starts
the page in a child process on UI_PORT, pointed at the API through
API_BASE_URL. Environment variables are loaded from .env file.
"""

import logging
import os
import subprocess
import sys
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()

logger = logging.getLogger(__name__)

_WILDCARD_HOSTS = {"0.0.0.0", "::", ""}


class ServerSettings(BaseModel):
    """Process-level settings read from the environment.

    Attributes:
        mode: ``integrated`` (one server) or ``separate`` (API + UI process).
        host: Interface the servers bind to.
        port: API port (also the UI port in integrated mode).
        ui_port: UI port in separate mode.
        log_level: Root logging level.
        storage_secret: NiceGUI storage secret.
    """

    mode: Literal["integrated", "separate"] = Field(
        default_factory=lambda: os.getenv("RUN_MODE", "integrated").lower(),
        validate_default=True,
    )
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(
        default_factory=lambda: os.getenv("PORT", "8000"), validate_default=True, gt=0
    )
    ui_port: int = Field(
        default_factory=lambda: os.getenv("UI_PORT", "8080"), validate_default=True, gt=0
    )
    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"), validate_default=True
    )
    storage_secret: str = Field(
        default_factory=lambda: os.getenv("NICEGUI_STORAGE_SECRET", "gemini-chat-secret")
    )

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def api_base_url(self) -> str:
        """URL the UI process uses to reach the API."""
        host = "localhost" if self.host in _WILDCARD_HOSTS else self.host
        return f"http://{host}:{self.port}"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def ui_process_env(settings: ServerSettings) -> dict[str, str]:
    """Environment for the standalone UI process."""
    env = dict(os.environ)
    env.update(
        API_BASE_URL=settings.api_base_url,
        HOST=settings.host,
        UI_PORT=str(settings.ui_port),
    )
    return env


def serve_integrated(settings: ServerSettings) -> None:
    """Serve the API and the chat page from one uvicorn server."""
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()
    ui.run_with(
        app,
        title="Gemini Chat",
        favicon="✨",
        storage_secret=settings.storage_secret,
    )

    logger.info(f"Chat UI and API on {settings.api_base_url} (docs at /docs)")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def serve_separate(settings: ServerSettings) -> None:
    """Serve the API here and the chat page from a child process."""
    import uvicorn

    from src.api.app import app

    ui_proc = subprocess.Popen(
        [sys.executable, "-m", "src.ui.chat_page"],
        env=ui_process_env(settings),
    )
    logger.info(
        f"API on {settings.api_base_url}, chat UI on port {settings.ui_port}"
    )

    try:
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    finally:
        ui_proc.terminate()
        ui_proc.wait()


def main() -> None:
    settings = ServerSettings()
    configure_logging(settings.log_level)
    logger.info(f"Starting Gemini Chat in {settings.mode} mode")

    if settings.mode == "separate":
        serve_separate(settings)
    else:
        serve_integrated(settings)


if __name__ == "__main__":
    main()
