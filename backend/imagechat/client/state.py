"""
Session state for the two-pane image chat UI.

A single immutable SessionState is held by a Store. Every transition is a
pure reducer (state, ...) -> state, so the transcript only ever grows and
no message is mutated after creation.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Callable

from imagechat.models.chat import ChatMessage
from imagechat.models.image import ProcessedImageResult
from imagechat.services.image_service import READ_ERROR_MESSAGE

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome! Upload an image to start analyzing."
IMAGE_PROCESSED_MESSAGE = "Image processed. Text and description are now available."
PROCESSING_FAILED_ERROR = "Image processing failed"
PROCESSING_FAILED_MESSAGE = "Sorry, I couldn't process the image. Please try again."
CHAT_FAILED_MESSAGE = "Sorry, I am having trouble processing your request. Please try again."


@dataclass(frozen=True)
class SessionState:
    image: str | None = None
    image_preview: str | None = None
    result: ProcessedImageResult | None = None
    error: str | None = None
    is_processing: bool = False
    language: str = "en"
    messages: tuple[ChatMessage, ...] = ()
    is_chat_processing: bool = False
    # Bumped whenever an in-flight processing response should be ignored.
    image_generation: int = 0


def initial_state(language: str = "en") -> SessionState:
    return SessionState(
        language=language,
        messages=(ChatMessage(content=WELCOME_MESSAGE, sender="ai"),),
    )


def _append(state: SessionState, message: ChatMessage) -> tuple[ChatMessage, ...]:
    return state.messages + (message,)


# Image flow

def image_selected(state: SessionState, data_uri: str) -> SessionState:
    # Preview and payload come from the same encoding pass.
    return replace(
        state,
        image=data_uri,
        image_preview=data_uri,
        error=None,
        is_processing=False,
        image_generation=state.image_generation + 1,
    )


def image_rejected(state: SessionState, reason: str) -> SessionState:
    return replace(state, error=reason)


def image_read_failed(state: SessionState) -> SessionState:
    return replace(state, image=None, image_preview=None, error=READ_ERROR_MESSAGE)


def error_dismissed(state: SessionState) -> SessionState:
    return replace(state, error=None)


def language_selected(state: SessionState, language: str) -> SessionState:
    return replace(state, language=language)


def processing_started(state: SessionState) -> SessionState:
    return replace(
        state,
        is_processing=True,
        error=None,
        result=None,
        image_generation=state.image_generation + 1,
    )


def image_processed(state: SessionState, generation: int, result: ProcessedImageResult) -> SessionState:
    if generation != state.image_generation:
        logger.info("Discarding stale processing result (generation %d, current %d)", generation, state.image_generation)
        return state
    return replace(
        state,
        result=result,
        is_processing=False,
        messages=_append(state, ChatMessage(content=IMAGE_PROCESSED_MESSAGE, sender="ai")),
    )


def processing_failed(state: SessionState, generation: int) -> SessionState:
    if generation != state.image_generation:
        logger.info("Discarding stale processing failure (generation %d)", generation)
        return state
    return replace(
        state,
        error=PROCESSING_FAILED_ERROR,
        is_processing=False,
        messages=_append(state, ChatMessage(content=PROCESSING_FAILED_MESSAGE, sender="ai")),
    )


# Chat flow

def message_sent(state: SessionState, message: ChatMessage) -> SessionState:
    return replace(state, messages=_append(state, message), is_chat_processing=True)


def message_received(state: SessionState, content: str) -> SessionState:
    return replace(
        state,
        messages=_append(state, ChatMessage(content=content, sender="ai")),
        is_chat_processing=False,
    )


def message_failed(state: SessionState) -> SessionState:
    return replace(
        state,
        messages=_append(state, ChatMessage(content=CHAT_FAILED_MESSAGE, sender="ai")),
        is_chat_processing=False,
    )


Listener = Callable[[SessionState], None]


@dataclass
class Store:
    """Holds the current SessionState and notifies listeners on every change."""

    state: SessionState = field(default_factory=initial_state)
    listeners: list[Listener] = field(default_factory=list)

    def dispatch(self, reducer: Callable[..., SessionState], *args) -> SessionState:
        new_state = reducer(self.state, *args)
        if new_state is not self.state:
            self.state = new_state
            for listener in self.listeners:
                listener(new_state)
        return self.state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self.listeners.append(listener)
        return lambda: self.listeners.remove(listener)
