# api/app/main.py

from contextlib import asynccontextmanager
from functools import lru_cache
import logging

from fastapi import Depends, FastAPI, UploadFile, File, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from text_extractor import utils
from text_extractor.config import Settings
from text_extractor.encoder import file_to_base64
from text_extractor.errors import EncodingError, ValidationError
from text_extractor.extraction_client import ExtractionClient
from text_extractor.schemas import Document, ExtractResponse, HealthResponse
from text_extractor.session import check_media_type

logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache
def get_client() -> ExtractionClient:
    return ExtractionClient(get_settings())


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Thiếu API key thì dừng ngay lúc khởi động, không để lỗi tới từng request
    settings = get_settings()
    utils.setup_logging(settings.log_level)
    logger.info("Text extraction API using model %s", settings.model)
    yield


app = FastAPI(title="Document Text Extractor API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)


@app.post("/extract", response_model=ExtractResponse)
async def extract_endpoint(
    file: UploadFile = File(...),
    client: ExtractionClient = Depends(get_client),
):
    """
    1) Nhận ảnh upload, chỉ chấp nhận MIME image/*
    2) Mã hoá base64
    3) Gọi model một lần, trả về text thô
    """
    document = Document(
        content=await file.read(),
        mime_type=file.content_type or "",
        name=file.filename or "",
    )
    try:
        check_media_type(document)
    except ValidationError as e:
        raise HTTPException(status_code=415, detail=str(e))

    try:
        payload = await file_to_base64(document)
    except EncodingError as e:
        logger.warning("Cannot encode %s: %s", document.name, e)
        raise HTTPException(status_code=422, detail=str(e))

    result = await client.extract_text(document.mime_type, payload)
    if result.is_error:
        raise HTTPException(status_code=502, detail=result.error)

    return ExtractResponse(
        text=result.text,
        file_name=utils.output_file_name(document.name),
        content_type=document.mime_type,
        file_size_bytes=len(document.content),
        timestamp=utils.get_timestamp(),
    )


@app.get("/health", response_model=HealthResponse)
def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint"""
    return HealthResponse(status="ok", timestamp=utils.get_timestamp(), model=settings.model)
