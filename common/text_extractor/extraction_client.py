"""
One multimodal request to Mistral per extraction.

The client never raises to its caller: network, auth, SDK and malformed
response failures all come back as ``ExtractionResult.failed(...)`` whose
message starts with "Error".
"""
import logging
from typing import Optional

from mistralai import Mistral

from .config import Settings
from .schemas import ERROR_MARKER, ExtractionResult
from .utils import compute_file_hash

logger = logging.getLogger(__name__)

OCR_PROMPT = (
    "Perform OCR on this image. Extract all visible text from this document. "
    "Preserve the original line breaks and formatting as much as possible. "
    "Do not add any commentary, explanation, or markdown formatting. "
    "Only provide the raw extracted text."
)
UNKNOWN_ERROR = "An unknown error occurred during text extraction."


class MalformedResponse(Exception):
    pass


def build_messages(mime_type: str, base64_image: str) -> list:
    return [
        {
            "role": "user",
            "content": [
                {"type": "image_url", "image_url": f"data:{mime_type};base64,{base64_image}"},
                {"type": "text", "text": OCR_PROMPT},
            ],
        }
    ]


def response_text(response) -> str:
    """Lấy text từ ChatCompletionResponse; content có thể là str hoặc list chunk."""
    choices = getattr(response, "choices", None)
    if not choices:
        raise MalformedResponse("response contained no choices")
    content = choices[0].message.content
    if isinstance(content, list):
        content = "".join(getattr(chunk, "text", "") or "" for chunk in content)
    if not content:
        raise MalformedResponse("model returned no text")
    return content


class ExtractionClient:
    def __init__(self, settings: Settings, client: Optional[Mistral] = None):
        self.model = settings.model
        self._client = client or Mistral(api_key=settings.api_key)

    async def extract_text(self, mime_type: str, base64_image: str) -> ExtractionResult:
        logger.info(
            "Requesting OCR from %s: type=%s, payload=%d chars, hash=%s",
            self.model, mime_type, len(base64_image), compute_file_hash(base64_image.encode()),
        )
        try:
            response = await self._client.chat.complete_async(
                model=self.model,
                messages=build_messages(mime_type, base64_image),
            )
            text = response_text(response)
        except Exception as e:
            logger.error("Error extracting text from image: %s", e)
            if str(e):
                return ExtractionResult.failed(f"{ERROR_MARKER} calling Mistral API: {e}")
            return ExtractionResult.failed(f"{ERROR_MARKER}: {UNKNOWN_ERROR}")
        logger.info("OCR returned %d characters", len(text))
        return ExtractionResult.ok(text)
