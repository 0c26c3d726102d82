import os
import logging
import datetime
import hashlib

DEFAULT_OUTPUT_NAME = "extracted-text"

def setup_logging(level=None):
    """
    Cấu hình logging đơn giản, mức log lấy từ LOG_LEVEL nếu không truyền vào.
    """
    if level is None:
        level = get_env("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        level=level,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger()

def get_env(key: str, default=None):
    """
    Lấy biến môi trường với giá trị default nếu không tồn tại.
    """
    return os.getenv(key, default)

def get_timestamp():
    """
    Trả về timestamp hiện tại dạng ISO 8601 để dùng trong API responses.
    """
    return datetime.datetime.now().isoformat()

def compute_file_hash(file_bytes: bytes) -> str:
    """
    Tính hash MD5 cho nội dung file.
    """
    return hashlib.md5(file_bytes).hexdigest()

def output_file_name(filename: str = None, extension: str = "txt") -> str:
    """
    Tên file tải xuống: bỏ phần sau dấu chấm cuối cùng rồi gắn đuôi mới.
    "scan.jpg" -> "scan.txt", "a.b.png" -> "a.b.txt".
    Tên không có đuôi (hoặc rỗng) dùng tên mặc định "extracted-text".
    """
    stem = ".".join(filename.split(".")[:-1]) if filename else ""
    return f"{stem or DEFAULT_OUTPUT_NAME}.{extension}"
