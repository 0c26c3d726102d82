"""
Session controller: the select -> extract -> download flow for one user.

State is an immutable ``SessionState`` replaced on every transition; the busy
flag is derived from the phase so it can't drift from it.
"""
import io
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict

from .encoder import file_to_base64, read_as_data_uri
from .errors import EncodingError, ValidationError
from .extraction_client import ExtractionClient
from .schemas import Document, ExtractionResult, is_image
from .utils import output_file_name

logger = logging.getLogger(__name__)

INVALID_FILE_TYPE = "Invalid file type. Please upload an image file."
UNEXPECTED_ERROR = "An unexpected error occurred."


def check_media_type(document: Document):
    """Raise ValidationError unless the declared MIME type is image/*."""
    if not is_image(document.mime_type):
        raise ValidationError(INVALID_FILE_TYPE)


class Phase(str, Enum):
    IDLE = "idle"
    READY = "ready"
    EXTRACTING = "extracting"
    EXTRACTED = "extracted"
    FAILED = "failed"


class SessionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: Phase = Phase.IDLE
    document: Optional[Document] = None
    preview: Optional[str] = None
    result: ExtractionResult = ExtractionResult()


@dataclass
class TextDownload:
    file_name: str
    data: io.BytesIO
    mime_type: str = "text/plain"


class SessionController:
    def __init__(self, client: ExtractionClient):
        self._client = client
        self.state = SessionState()

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def busy(self) -> bool:
        return self.state.phase is Phase.EXTRACTING

    @property
    def document(self) -> Optional[Document]:
        return self.state.document

    @property
    def preview(self) -> Optional[str]:
        return self.state.preview

    @property
    def text(self) -> str:
        return self.state.result.text

    @property
    def error(self) -> str:
        return self.state.result.error

    @property
    def display_error(self) -> str:
        """Error message with the "Error:" label the UI shows, or "" when there is none."""
        return f"Error: {self.error}" if self.error else ""

    @property
    def can_extract(self) -> bool:
        return self.state.document is not None and not self.busy

    @property
    def can_download(self) -> bool:
        return bool(self.text) and not self.busy

    def select(self, document: Document) -> bool:
        """
        Validate and store a newly picked file. Returns True when the session
        is READY for extraction. Returns False without touching the state
        while an extraction is running.
        """
        if self.busy:
            logger.warning("Ignoring selection of %s: extraction in progress", document.name)
            return False
        try:
            check_media_type(document)
            preview = read_as_data_uri(document)
        except ValidationError as e:
            logger.info("Rejected %s: type %r is not an image", document.name, document.mime_type)
            self.state = SessionState(phase=Phase.FAILED, result=ExtractionResult.failed(str(e)))
            return False
        except EncodingError as e:
            self.state = SessionState(phase=Phase.FAILED, result=ExtractionResult.failed(str(e)))
            return False
        self.state = SessionState(phase=Phase.READY, document=document, preview=preview)
        logger.info("Selected %s (%s, %d bytes)", document.name, document.mime_type, len(document.content))
        return True

    async def extract(self) -> bool:
        """
        Run encoder then extraction client for the selected document.
        No-op (returns False) without a document or while already extracting.
        """
        document = self.state.document
        if document is None or self.busy:
            logger.debug("extract() ignored in phase %s", self.state.phase.value)
            return False

        self.state = self.state.model_copy(update={"phase": Phase.EXTRACTING, "result": ExtractionResult()})
        # Cancellation leaves this default in place; the phase still settles below
        result = ExtractionResult.failed(UNEXPECTED_ERROR)
        try:
            payload = await file_to_base64(document)
            result = await self._client.extract_text(document.mime_type, payload)
            if result.is_empty:
                result = ExtractionResult.failed(f"Failed to extract text: no text returned for {document.name}")
        except Exception as e:
            logger.exception("Extraction failed for %s", document.name)
            result = ExtractionResult.failed(f"Failed to extract text: {e}" if str(e) else UNEXPECTED_ERROR)
        finally:
            phase = Phase.FAILED if result.is_error else Phase.EXTRACTED
            self.state = self.state.model_copy(update={"phase": phase, "result": result})
        return True

    def download(self, save: Callable[[TextDownload], None]) -> Optional[str]:
        """
        Hand the extracted text to ``save`` as a text/plain file. The buffer
        is closed once ``save`` returns. Returns the file name, or None when
        there is no text to save.
        """
        if not self.can_download:
            return None
        document = self.state.document
        file_name = output_file_name(document.name if document else None)
        with io.BytesIO(self.text.encode("utf-8")) as buffer:
            save(TextDownload(file_name=file_name, data=buffer))
        logger.debug("Prepared download %s", file_name)
        return file_name

    def reset(self):
        self.state = SessionState()
