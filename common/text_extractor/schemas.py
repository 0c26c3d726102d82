from typing import Optional
from pydantic import BaseModel, ConfigDict

IMAGE_PREFIX = "image/"
ERROR_MARKER = "Error"
# Extensions offered by the file picker; the MIME check in the session is the real gate
ACCEPTED_IMAGE_TYPES = ["png", "jpg", "jpeg", "webp", "gif"]


def is_image(mime_type: Optional[str]) -> bool:
    """Chỉ kiểm tra tiền tố MIME, không kiểm tra magic bytes."""
    return bool(mime_type) and mime_type.startswith(IMAGE_PREFIX)


class Document(BaseModel):
    """
    Ảnh người dùng đã chọn. Thay thế toàn bộ khi chọn file mới, không sửa từng phần.
    """
    model_config = ConfigDict(frozen=True)

    content: bytes
    mime_type: str
    name: str = ""

    @classmethod
    def from_upload(cls, uploaded) -> "Document":
        """Build from a Streamlit UploadedFile (or any object with name/type/getvalue)."""
        return cls(
            content=uploaded.getvalue(),
            mime_type=uploaded.type or "",
            name=uploaded.name or "",
        )


class ExtractionResult(BaseModel):
    """
    Tagged result of one extraction: either text or an error, never both.
    Both empty means extraction has not run yet.
    """
    model_config = ConfigDict(frozen=True)

    text: str = ""
    error: str = ""

    @classmethod
    def ok(cls, text: str) -> "ExtractionResult":
        return cls(text=text)

    @classmethod
    def failed(cls, reason: str) -> "ExtractionResult":
        return cls(error=reason)

    @property
    def is_error(self) -> bool:
        return bool(self.error)

    @property
    def is_empty(self) -> bool:
        return not self.text and not self.error


class ExtractResponse(BaseModel):
    text: str                # văn bản thô model trả về
    file_name: str           # tên file .txt gợi ý để tải xuống
    content_type: str
    file_size_bytes: int
    timestamp: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    model: str
