import logging
import mimetypes
from pathlib import Path

import httpx

from imagechat.client import state as actions
from imagechat.client.state import SessionState, Store, initial_state
from imagechat.config import UIConfig, get_ui_config
from imagechat.models.chat import ChatMessage, ChatResponse
from imagechat.models.image import ProcessedImageResult
from imagechat.services.image_service import ImageValidationError, read_data_uri, validate_image

logger = logging.getLogger(__name__)


class ImageChatSession:
    """
    Drives the session state machine against a running server.

    Every user action dispatches reducers on the store; network calls are
    awaited one at a time within the action that started them.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        ui_config: UIConfig | None = None,
        language: str = "en",
    ):
        self.http = http
        self.ui_config = ui_config or get_ui_config()
        self.store = Store(state=initial_state(language))

    @property
    def state(self) -> SessionState:
        return self.store.state

    async def select_file(self, path: Path, content_type: str | None = None) -> bool:
        """Validate and encode a file. Returns True when it became the current image."""
        path = Path(path)
        content_type = content_type or mimetypes.guess_type(path.name)[0]
        try:
            size = path.stat().st_size
        except OSError:
            logger.warning("Could not stat %s", path, exc_info=True)
            self.store.dispatch(actions.image_read_failed)
            return False

        try:
            validate_image(content_type, size, self.ui_config)
        except ImageValidationError as e:
            self.store.dispatch(actions.image_rejected, str(e))
            return False

        try:
            data_uri = await read_data_uri(path, content_type)
        except OSError:
            logger.warning("Could not read %s", path, exc_info=True)
            self.store.dispatch(actions.image_read_failed)
            return False

        self.store.dispatch(actions.image_selected, data_uri)
        return True

    def select_language(self, language: str) -> None:
        self.store.dispatch(actions.language_selected, language)

    def dismiss_error(self) -> None:
        self.store.dispatch(actions.error_dismissed)

    async def process_image(self) -> None:
        if not self.state.image:
            return

        self.store.dispatch(actions.processing_started)
        generation = self.state.image_generation
        try:
            response = await self.http.post(
                "/process-image",
                json={"image": self.state.image, "language": self.state.language},
            )
            response.raise_for_status()
            result = ProcessedImageResult.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers both invalid JSON and ValidationError
            logger.warning("Image processing request failed: %s", e)
            self.store.dispatch(actions.processing_failed, generation)
            return

        self.store.dispatch(actions.image_processed, generation, result)

    async def send_message(self, text: str) -> None:
        # Chat is serialized: a second submission while waiting is ignored.
        if not text.strip() or self.state.is_chat_processing:
            return

        history = self.state.messages
        result = self.state.result
        self.store.dispatch(actions.message_sent, ChatMessage(content=text, sender="user"))

        try:
            response = await self.http.post(
                "/chat",
                json={
                    "messages": [m.model_dump(mode="json") for m in history],
                    "newMessage": text,
                    "imageContext": {
                        "description": result.description if result else "",
                        "text": result.text if result else "",
                    },
                },
            )
            response.raise_for_status()
            reply = ChatResponse.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Chat request failed: %s", e)
            self.store.dispatch(actions.message_failed)
            return

        self.store.dispatch(actions.message_received, reply.message)
