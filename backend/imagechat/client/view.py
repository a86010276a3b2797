"""Derive what the two panes show from the current session state."""

import textwrap
from dataclasses import dataclass

from imagechat.client.state import SessionState
from imagechat.config import Theme, UIConfig

DISABLED_COLOR = "#cccccc"


@dataclass(frozen=True)
class MessageView:
    id: str
    content: str
    sender: str
    align: str
    background: str


@dataclass(frozen=True)
class SessionView:
    theme: Theme
    language: str
    has_preview: bool
    process_label: str
    process_enabled: bool
    process_background: str
    send_label: str
    error: str | None
    extracted_text: str | None
    description: str | None
    messages: tuple[MessageView, ...]


def build_view(state: SessionState, ui_config: UIConfig, theme: str | None = None) -> SessionView:
    palette = ui_config.themes.get(theme or ui_config.default_theme, ui_config.themes[ui_config.default_theme])
    has_image = state.image is not None
    return SessionView(
        theme=palette,
        language=state.language,
        has_preview=state.image_preview is not None,
        process_label="Processing..." if state.is_processing else "Process Image",
        process_enabled=has_image,
        process_background=palette.secondary if has_image else DISABLED_COLOR,
        send_label="Sending..." if state.is_chat_processing else "Send",
        error=state.error,
        extracted_text=state.result.text if state.result else None,
        description=state.result.description if state.result else None,
        messages=tuple(
            MessageView(
                id=msg.id,
                content=msg.content,
                sender=msg.sender,
                align="right" if msg.sender == "user" else "left",
                background=palette.primary if msg.sender == "user" else palette.accent,
            )
            for msg in state.messages
        ),
    )


def render_text(view: SessionView, width: int = 72) -> str:
    """Plain-text rendering of both panes for terminals."""
    lines = ["== Image =="]
    lines.append("[preview loaded]" if view.has_preview else "[no image]")
    lines.append(f"Language: {view.language}")
    state_hint = "" if view.process_enabled else " (select an image first)"
    lines.append(f"[{view.process_label}]{state_hint}")
    if view.error:
        lines.append(f"! {view.error}")
    if view.extracted_text:
        lines.append("Extracted Text:")
        lines.extend(textwrap.wrap(view.extracted_text, width) or [""])
    if view.description:
        lines.append("Image Description:")
        lines.extend(textwrap.wrap(view.description, width) or [""])

    lines.append("")
    lines.append("== Chat ==")
    for msg in view.messages:
        for line in textwrap.wrap(msg.content, width - 8) or [""]:
            if msg.align == "right":
                lines.append(line.rjust(width))
            else:
                lines.append(line)
    lines.append(f"[{view.send_label}]")
    return "\n".join(lines)
