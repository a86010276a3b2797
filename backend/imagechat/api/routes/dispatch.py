"""Route any other POST path by substring onto the image and chat pipelines."""

import json
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, ValidationError

from imagechat.api.errors import format_validation_errors
from imagechat.api.routes.chat import run_chat
from imagechat.api.routes.image import run_process_image
from imagechat.models.chat import ChatRequest
from imagechat.models.image import ProcessImageRequest
from imagechat.services.llm_service import LLMService, get_llm_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def _parse_body(request: Request, model: type[BaseModel]) -> BaseModel:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Malformed JSON body")
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=format_validation_errors(e.errors()),
        )


@router.post("/{path:path}", include_in_schema=False)
async def dispatch_post(
    request: Request,
    llm: LLMService = Depends(get_llm_service),
):
    path = request.url.path
    if "/process-image" in path:
        payload = await _parse_body(request, ProcessImageRequest)
        result = await run_process_image(payload, llm)
        return result.model_dump(by_alias=True, exclude_none=True)
    if "/chat" in path:
        payload = await _parse_body(request, ChatRequest)
        return (await run_chat(payload, llm)).model_dump()

    logger.info("Unhandled POST route: %s", path)
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unhandled route")
