"""Extract text from an image, then describe the image from that text."""

import logging

from imagechat.models.image import ProcessImageRequest, ProcessedImageResult
from imagechat.services.llm_service import LLMService

logger = logging.getLogger(__name__)

EXTRACTION_SYSTEM_PROMPT = (
    "You are an expert at extracting text from images. "
    "Transcribe ALL visible text precisely."
)

EXTRACTION_PROMPT = (
    "Extract ALL text from this image. Be extremely precise and capture "
    "every single word or character visible."
)

DESCRIPTION_SYSTEM_PROMPT = """You are an expert image analyst.
Generate a comprehensive description of the image
BASED SOLELY on the extracted text: "{extracted_text}".
If no text is present, describe the image's key visual elements."""

DESCRIPTION_PROMPT = """Extracted Text: {extracted_text}
Language: {language}
Provide a detailed description focusing on the context of the text and image."""

NO_TEXT_FALLBACK = "No text found"
NO_DESCRIPTION_FALLBACK = "Unable to generate a description based on the extracted text."


def _image_message(image_url: str, text: str) -> dict:
    return {
        "role": "user",
        "content": [
            {"type": "image_url", "image_url": {"url": image_url}},
            {"type": "text", "text": text},
        ],
    }


async def extract_text(image_url: str, llm: LLMService) -> str:
    text = await llm.chat_completion(
        messages=[_image_message(image_url, EXTRACTION_PROMPT)],
        system_prompt=EXTRACTION_SYSTEM_PROMPT,
    )
    return text or NO_TEXT_FALLBACK


async def describe_image(image_url: str, extracted_text: str, language: str, llm: LLMService) -> str:
    """Describe the image, scoped to what the extracted text says about it."""
    description = await llm.chat_completion(
        messages=[
            _image_message(
                image_url,
                DESCRIPTION_PROMPT.format(extracted_text=extracted_text, language=language),
            )
        ],
        system_prompt=DESCRIPTION_SYSTEM_PROMPT.format(extracted_text=extracted_text),
    )
    return description or NO_DESCRIPTION_FALLBACK


async def process_image(request: ProcessImageRequest, llm: LLMService) -> ProcessedImageResult:
    """
    Run the two model calls in order.

    The description call depends on the extracted text, so the calls are
    never issued concurrently. Any failure aborts the whole request.
    """
    text = await extract_text(request.image, llm)
    logger.info("Extracted %d characters of text", len(text))
    description = await describe_image(request.image, text, request.language, llm)
    return ProcessedImageResult(text=text, description=description)
