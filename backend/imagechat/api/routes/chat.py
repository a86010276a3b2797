import logging
from fastapi import APIRouter, Depends, HTTPException, status

from imagechat.models.chat import ChatRequest, ChatResponse
from imagechat.models.error import ErrorResponse
from imagechat.services.chat_service import reply
from imagechat.services.llm_service import LLMService, get_llm_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def run_chat(payload: ChatRequest, llm: LLMService) -> ChatResponse:
    try:
        return ChatResponse(message=await reply(payload, llm))
    except Exception as e:
        logger.exception("Chat completion failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e) or "Unknown error",
        )


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat_endpoint(
    payload: ChatRequest,
    llm: LLMService = Depends(get_llm_service),
):
    """Answer a chat message in the context of the processed image."""
    return await run_chat(payload, llm)
