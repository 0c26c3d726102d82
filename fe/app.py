# fe/app.py
import asyncio

import streamlit as st

from text_extractor import utils
from text_extractor.config import Settings
from text_extractor.errors import ConfigurationError
from text_extractor.extraction_client import ExtractionClient
from text_extractor.schemas import ACCEPTED_IMAGE_TYPES, Document
from text_extractor.session import SessionController, TextDownload

# ============================================================
# Cấu hình trang
# ============================================================

st.set_page_config(layout="wide", page_title="Document Text Extractor", page_icon="📄")

# ============================================================
# Cấu hình & client (một lần cho cả process)
# ============================================================

@st.cache_resource
def load_client() -> ExtractionClient:
    settings = Settings.from_env()
    utils.setup_logging(settings.log_level)
    return ExtractionClient(settings)

try:
    client = load_client()
except ConfigurationError as e:
    # Thiếu API key: lỗi khởi động, không phải lỗi của phiên
    st.error(str(e))
    st.stop()

# ============================================================
# Mỗi phiên trình duyệt giữ một SessionController riêng
# ============================================================

if "controller" not in st.session_state:
    st.session_state["controller"] = SessionController(client)
st.session_state.setdefault("upload_id", None)
controller: SessionController = st.session_state["controller"]

def save_download(download: TextDownload):
    st.download_button(
        "Download .txt",
        data=download.data.getvalue(),
        file_name=download.file_name,
        mime=download.mime_type,
        key="download_txt",
    )

# ============================================================
# Tiêu đề
# ============================================================

st.title("Document Text Extractor")
st.markdown("Upload an image and let AI extract the text for you.")

# ============================================================
# Chọn file
# ============================================================

uploaded = st.file_uploader(
    "Upload image",
    type=ACCEPTED_IMAGE_TYPES,
    disabled=controller.busy,
)
if uploaded is None:
    if st.session_state["upload_id"] is not None:
        st.session_state["upload_id"] = None
        controller.reset()
elif uploaded.file_id != st.session_state["upload_id"]:
    st.session_state["upload_id"] = uploaded.file_id
    controller.select(Document.from_upload(uploaded))

col_preview, col_text = st.columns(2)
with col_preview:
    st.subheader("Image Preview")
    if controller.preview:
        st.image(controller.preview)
    else:
        st.caption("Your uploaded document will appear here.")

# ============================================================
# Trích xuất
# ============================================================

if st.button("Extract Text", disabled=not controller.can_extract, type="primary"):
    with st.spinner("Extracting..."):
        asyncio.run(controller.extract())

with col_text:
    st.subheader("Extracted Text")
    st.text_area(
        "Extracted Text",
        value=controller.text,
        height=400,
        disabled=True,
        placeholder="Extracted text will be displayed here...",
        label_visibility="collapsed",
    )

if controller.error:
    st.error(controller.display_error)

# ============================================================
# Tải xuống
# ============================================================

if controller.download(save_download) is None:
    st.button("Download .txt", disabled=True, key="download_disabled")
