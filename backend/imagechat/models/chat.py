import time
import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


def new_message_id() -> str:
    return f"msg-{uuid.uuid4().hex}"


def now_ms() -> int:
    return int(time.time() * 1000)


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_message_id)
    content: str
    sender: Literal["user", "ai"]
    timestamp: int = Field(default_factory=now_ms)


class ImageContext(BaseModel):
    description: str = ""
    text: str = ""


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = []
    new_message: str = Field(alias="newMessage", min_length=1)
    image_context: ImageContext = Field(default_factory=ImageContext, alias="imageContext")


class ChatResponse(BaseModel):
    message: str
