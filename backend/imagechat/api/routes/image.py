import logging
from fastapi import APIRouter, Depends, HTTPException, status

from imagechat.models.error import ErrorResponse
from imagechat.models.image import ProcessImageRequest, ProcessedImageResult
from imagechat.services.image_processing_service import process_image
from imagechat.services.llm_service import LLMService, get_llm_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def run_process_image(payload: ProcessImageRequest, llm: LLMService) -> ProcessedImageResult:
    try:
        return await process_image(payload, llm)
    except Exception as e:
        logger.exception("Image processing failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e) or "Unknown error",
        )


@router.post(
    "/process-image",
    response_model=ProcessedImageResult,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def process_image_endpoint(
    payload: ProcessImageRequest,
    llm: LLMService = Depends(get_llm_service),
):
    """Extract the text of an image and describe it."""
    return await run_process_image(payload, llm)
