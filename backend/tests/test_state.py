import pytest

from conftest import SAMPLE_IMAGE_URI
from imagechat.client.state import (
    CHAT_FAILED_MESSAGE,
    IMAGE_PROCESSED_MESSAGE,
    PROCESSING_FAILED_ERROR,
    PROCESSING_FAILED_MESSAGE,
    WELCOME_MESSAGE,
    Store,
    error_dismissed,
    image_processed,
    image_read_failed,
    image_rejected,
    image_selected,
    initial_state,
    message_failed,
    message_received,
    message_sent,
    processing_failed,
    processing_started,
)
from imagechat.models.chat import ChatMessage
from imagechat.models.image import ProcessedImageResult
from imagechat.services.image_service import READ_ERROR_MESSAGE

RESULT = ProcessedImageResult(text="STOP", description="A stop sign.")


@pytest.fixture
def selected():
    return image_selected(initial_state(), SAMPLE_IMAGE_URI)


def test_initial_state_has_welcome_message():
    state = initial_state("de")
    assert state.language == "de"
    assert [m.content for m in state.messages] == [WELCOME_MESSAGE]
    assert state.messages[0].sender == "ai"
    assert state.image is None


def test_selected_image_is_both_payload_and_preview(selected):
    assert selected.image == SAMPLE_IMAGE_URI
    assert selected.image_preview == selected.image
    assert selected.error is None


def test_rejection_leaves_image_state_unchanged(selected):
    rejected = image_rejected(selected, "File is too large. Maximum size is 5MB.")
    assert rejected.error == "File is too large. Maximum size is 5MB."
    assert rejected.image == selected.image
    assert rejected.image_preview == selected.image_preview
    assert rejected.result == selected.result
    assert rejected.messages == selected.messages


def test_selecting_clears_previous_error():
    state = image_rejected(initial_state(), "bad")
    assert image_selected(state, SAMPLE_IMAGE_URI).error is None


def test_read_failure_clears_image(selected):
    failed = image_read_failed(selected)
    assert failed.image is None
    assert failed.image_preview is None
    assert failed.error == READ_ERROR_MESSAGE
    assert error_dismissed(failed).error is None


def test_processing_success(selected):
    started = processing_started(selected)
    assert started.is_processing
    assert started.result is None

    done = image_processed(started, started.image_generation, RESULT)
    assert not done.is_processing
    assert done.result == RESULT
    assert done.messages[-1].content == IMAGE_PROCESSED_MESSAGE
    assert done.messages[-1].sender == "ai"


def test_processing_failure(selected):
    started = processing_started(selected)
    failed = processing_failed(started, started.image_generation)
    assert not failed.is_processing
    assert failed.error == PROCESSING_FAILED_ERROR
    assert failed.messages[-1].content == PROCESSING_FAILED_MESSAGE


def test_stale_processing_response_is_discarded(selected):
    first = processing_started(selected)
    second = processing_started(first)

    after_stale = image_processed(second, first.image_generation, RESULT)
    assert after_stale is second

    assert processing_failed(second, first.image_generation) is second


def test_new_selection_supersedes_in_flight_processing(selected):
    started = processing_started(selected)
    reselected = image_selected(started, SAMPLE_IMAGE_URI)
    assert not reselected.is_processing
    assert image_processed(reselected, started.image_generation, RESULT) is reselected


def test_chat_round_trip():
    state = initial_state()
    user = ChatMessage(content="what does it say?", sender="user")
    sent = message_sent(state, user)
    assert sent.is_chat_processing
    assert sent.messages[-1] is user

    received = message_received(sent, "It says STOP.")
    assert not received.is_chat_processing
    assert received.messages[-1].sender == "ai"
    assert received.messages[-1].content == "It says STOP."

    failed = message_failed(sent)
    assert not failed.is_chat_processing
    assert failed.messages[-1].content == CHAT_FAILED_MESSAGE


def test_transcript_is_append_only(selected):
    state = selected
    steps = [
        lambda s: message_sent(s, ChatMessage(content="hi", sender="user")),
        lambda s: message_received(s, "hello"),
        processing_started,
        lambda s: image_processed(s, s.image_generation, RESULT),
        lambda s: message_sent(s, ChatMessage(content="and?", sender="user")),
        message_failed,
    ]
    for step in steps:
        before = state.messages
        state = step(state)
        assert len(state.messages) >= len(before)
        assert state.messages[: len(before)] == before

    ids = [m.id for m in state.messages]
    assert len(ids) == len(set(ids))


def test_message_ids_are_unique_within_the_same_millisecond():
    messages = [ChatMessage(content="x", sender="user", timestamp=1) for _ in range(1000)]
    assert len({m.id for m in messages}) == 1000


def test_store_notifies_on_change_only(selected):
    store = Store(state=selected)
    seen = []
    unsubscribe = store.subscribe(seen.append)

    stale = processing_started(selected).image_generation - 1
    store.dispatch(processing_started)
    store.dispatch(image_processed, stale, RESULT)
    assert len(seen) == 1

    unsubscribe()
    store.dispatch(error_dismissed)
    assert len(seen) == 1
