import logging

from imagechat.models.chat import ChatMessage, ChatRequest, ImageContext
from imagechat.services.llm_service import LLMService

logger = logging.getLogger(__name__)

CHAT_SYSTEM_PROMPT = """You are a helpful AI assistant.
Context may include an image description: {description}
Image text: {text}
Respond helpfully considering this context."""

FALLBACK_REPLY = "I'm not sure how to respond."

ROLE_BY_SENDER = {"user": "user", "ai": "assistant"}


def build_system_prompt(context: ImageContext) -> str:
    return CHAT_SYSTEM_PROMPT.format(description=context.description, text=context.text)


def build_chat_messages(transcript: list[ChatMessage], new_message: str) -> list[dict]:
    """Replay the transcript in order and append the new message as the last user turn."""
    chat_messages = [
        {"role": ROLE_BY_SENDER[msg.sender], "content": msg.content}
        for msg in transcript
    ]
    chat_messages.append({"role": "user", "content": new_message})
    return chat_messages


async def reply(request: ChatRequest, llm: LLMService) -> str:
    logger.info("Chat request with %d prior messages", len(request.messages))
    content = await llm.chat_completion(
        messages=build_chat_messages(request.messages, request.new_message),
        system_prompt=build_system_prompt(request.image_context),
    )
    return content or FALLBACK_REPLY
