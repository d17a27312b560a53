"""NiceGUI chat interface for the Gemini chat API."""

import json
import os
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

import httpx
from nicegui import events, ui

from src.gemini.catalog import DEFAULT_MODEL_ID, SUPPORTED_MODELS

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

_INLINE_RULES = [
    (
        r"```(\w*)\n?([\s\S]*?)```",
        r'<pre class="bg-gray-800 text-gray-100 rounded-lg p-3 my-2 overflow-x-auto text-xs"><code>\2</code></pre>',
    ),
    (
        r"`([^`]+)`",
        r'<code class="bg-gray-200 text-pink-600 px-1.5 py-0.5 rounded text-xs">\1</code>',
    ),
    (r"\*\*(.+?)\*\*", r"<strong>\1</strong>"),
    (r"__(.+?)__", r"<strong>\1</strong>"),
    (r"\*([^*]+)\*", r"<em>\1</em>"),
    (r"_([^_]+)_", r"<em>\1</em>"),
    (
        r"\[([^\]]+)\]\(([^)]+)\)",
        r'<a href="\2" class="text-blue-600 underline" target="_blank">\1</a>',
    ),
]


def _wrap_list_items(text: str, marker: str, tag: str, css: str) -> str:
    """Group consecutive lines starting with ``marker`` into an HTML list."""
    result: list[str] = []
    in_list = False
    for line in text.split("\n"):
        stripped = line.strip()
        if re.match(marker, stripped):
            if not in_list:
                result.append(f'<{tag} class="{css} list-inside my-2 space-y-1">')
                in_list = True
            result.append(f"<li>{re.sub(marker, '', stripped)}</li>")
            continue
        if in_list:
            result.append(f"</{tag}>")
            in_list = False
        result.append(line)
    if in_list:
        result.append(f"</{tag}>")
    return "\n".join(result)


def markdown_to_html(text: str) -> str:
    """Convert markdown to HTML for chat display.

    Supports: bold, italic, inline code, code blocks, links, lists.
    """
    text = text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")

    for pattern, replacement in _INLINE_RULES:
        text = re.sub(pattern, replacement, text)

    text = _wrap_list_items(text, r"^[-*]\s+", "ul", "list-disc")
    text = _wrap_list_items(text, r"^\d+\.\s+", "ol", "list-decimal")

    return text.replace("\n", "<br>")


def image_data_url(image: str, mime_type: str | None) -> str:
    """Build a data URL for a base64 image returned by the API."""
    return f"data:{mime_type or 'image/png'};base64,{image}"


@dataclass
class PendingFile:
    """File selected in the upload widget, sent with the next message."""

    name: str
    data: bytes
    content_type: str


class ChatSession:
    """Manages chat state for a user session."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []
        self.model_id: str = DEFAULT_MODEL_ID
        self.pending_file: PendingFile | None = None
        self.is_sending: bool = False

    def add_message(
        self,
        role: str,
        content: str,
        image: str | None = None,
        mime_type: str | None = None,
    ) -> None:
        self.messages.append({
            "role": role,
            "content": content,
            "image": image,
            "mimeType": mime_type,
            "time": datetime.now().strftime("%I:%M %p"),
        })

    def history(self) -> list[dict[str, str]]:
        """Messages in the ``{role, content}`` shape the API expects."""
        return [{"role": m["role"], "content": m["content"]} for m in self.messages]

    def clear(self) -> None:
        self.messages.clear()
        self.pending_file = None


class ChatClientError(Exception):
    """Raised when the chat API call fails."""


def build_chat_form(
    model_id: str,
    history: list[dict[str, str]],
    pending_file: PendingFile | None,
) -> tuple[dict[str, str], dict[str, tuple[str, bytes, str]] | None]:
    """Build the multipart form fields and files for POST /api/chat."""
    data = {"model": model_id, "messages": json.dumps(history)}
    files = None
    if pending_file is not None:
        files = {
            "file": (pending_file.name, pending_file.data, pending_file.content_type)
        }
    return data, files


async def send_chat(
    model_id: str,
    history: list[dict[str, str]],
    pending_file: PendingFile | None = None,
    base_url: str = API_BASE_URL,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """POST the conversation to the chat API and return the assistant message.

    Raises:
        ChatClientError: On an error response or connection failure.
    """
    data, files = build_chat_form(model_id, history, pending_file)
    async with httpx.AsyncClient(
        base_url=base_url, timeout=None, transport=transport
    ) as client:
        try:
            response = await client.post("/api/chat", data=data, files=files)
        except httpx.RequestError as e:
            raise ChatClientError(f"Connection failed: {e}") from e

    try:
        body = response.json()
    except ValueError:
        body = {}

    if response.is_error:
        raise ChatClientError(body.get("error") or f"HTTP {response.status_code}")

    replies = body.get("messages") or []
    if not replies:
        raise ChatClientError("Empty response from chat API")
    return replies[0]


async def fetch_model_options(
    base_url: str = API_BASE_URL,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, str]:
    """Map model ids to display names, preferring the API's catalogue."""
    try:
        async with httpx.AsyncClient(
            base_url=base_url, timeout=5.0, transport=transport
        ) as client:
            response = await client.get("/api/models")
            response.raise_for_status()
            return {m["id"]: m["name"] for m in response.json()["models"]}
    except (httpx.HTTPError, KeyError, ValueError):
        return {d.id: d.display_name for d in SUPPORTED_MODELS.values()}


CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<link href="https://fonts.googleapis.com/icon?family=Material+Icons" rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #4285f4 0%, #9b72cb 100%); }

    .message-user {
        background: linear-gradient(135deg, #4285f4 0%, #9b72cb 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .avatar-user { background: linear-gradient(135deg, #4285f4 0%, #9b72cb 100%); }
    .avatar-assistant { background: #6b7280; }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #4285f4; }

    .send-btn { background: linear-gradient(135deg, #4285f4 0%, #9b72cb 100%) !important; }

    .message-assistant strong { font-weight: 600; }
    .message-assistant pre { margin: 0.5rem 0; }
    .message-assistant code { font-family: 'Menlo', 'Monaco', monospace; }
    .message-assistant a { color: #4f46e5; }
</style>
"""


@ui.page("/")
async def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()
    model_options = await fetch_model_options()
    if session.model_id not in model_options:
        session.model_id = next(iter(model_options), session.model_id)

    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button
    upload: ui.upload
    attachment_label: ui.label

    def render_avatar(is_user: bool) -> None:
        css = "avatar-user" if is_user else "avatar-assistant"
        icon = "person" if is_user else "auto_awesome"
        avatar_classes = f"w-9 h-9 rounded-full flex items-center justify-center {css}"
        with ui.element("div").classes(avatar_classes):
            ui.icon(icon).classes("text-white text-lg")

    def render_message(msg: dict[str, Any]) -> None:
        is_user = msg["role"] == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not is_user:
                render_avatar(False)
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    if is_user:
                        content = msg["content"].replace("\n", "<br>")
                    else:
                        content = markdown_to_html(msg["content"])
                    ui.html(content, sanitize=False).classes("text-sm leading-relaxed")
                    if msg.get("image"):
                        ui.image(image_data_url(msg["image"], msg.get("mimeType"))).classes(
                            "w-72 rounded-lg mt-2"
                        )
                ui.label(msg["time"]).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                render_avatar(True)

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                with ui.column().classes("w-full h-64 items-center justify-center gap-3"):
                    ui.icon("forum").classes("text-5xl text-gray-300")
                    ui.label("Start a conversation").classes("text-lg text-gray-400")
            else:
                for msg in session.messages:
                    render_message(msg)

    def refresh_attachment() -> None:
        pending = session.pending_file
        attachment_label.set_text(f"📎 {pending.name}" if pending else "")
        attachment_label.set_visibility(pending is not None)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        session.pending_file = PendingFile(
            name=e.file.name,
            data=await e.file.read(),
            content_type=e.file.content_type or "application/octet-stream",
        )
        refresh_attachment()
        upload.reset()

    async def send_message() -> None:
        text = input_field.value.strip()
        if not text or session.is_sending:
            return

        input_field.value = ""
        session.is_sending = True
        send_btn.disable()

        session.add_message("user", text)
        pending_file, session.pending_file = session.pending_file, None
        refresh_attachment()
        refresh_messages()

        try:
            reply = await send_chat(session.model_id, session.history(), pending_file)
            session.add_message(
                "assistant",
                reply.get("content", ""),
                image=reply.get("image"),
                mime_type=reply.get("mimeType"),
            )
        except ChatClientError as e:
            session.add_message("assistant", f"Error: {e}")
            ui.notify(str(e), type="negative")
        finally:
            session.is_sending = False
            send_btn.enable()
            refresh_messages()

    def new_chat() -> None:
        session.clear()
        refresh_attachment()
        refresh_messages()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("auto_awesome").classes("text-white text-3xl")
                ui.label("Gemini Chat").classes("text-lg font-semibold text-white")
            with ui.row().classes("items-center gap-3"):
                ui.select(model_options, value=session.model_id).bind_value(
                    session, "model_id"
                ).props("dense dark borderless").classes("min-w-[180px]")
                ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            refresh_messages()

        # Input
        with ui.column().classes("w-full p-4 gap-2 bg-white border-t"):
            attachment_label = ui.label().classes("text-xs text-gray-500")
            refresh_attachment()
            with ui.row().classes("w-full gap-3 items-end"):
                upload = (
                    ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                    .props("flat dense hide-upload-btn")
                    .classes("w-40")
                )
                with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                    input_field = (
                        ui.textarea(placeholder="Type a message...")
                        .props("autogrow borderless dense rows=1")
                        .classes("w-full")
                        .on("keydown.enter.prevent", send_message)
                    )
                send_btn = (
                    ui.button(icon="send", on_click=send_message)
                    .props("round unelevated")
                    .classes("send-btn")
                )


def main() -> None:
    ui.run(
        title="Gemini Chat",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("UI_PORT", "8080")),
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "gemini-chat-secret"),
        reload=False,
    )


if __name__ == "__main__":
    main()
