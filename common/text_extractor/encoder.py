"""
Binary image -> base-64 payload for the model request.

``read_as_data_uri`` is the read primitive (its output doubles as the preview);
``file_to_base64`` strips the ``data:<mime>;base64,`` prefix and resolves
lazily so the caller can await it alongside the network call.
"""
import asyncio
import base64
import logging

from .errors import EncodingError
from .schemas import Document

logger = logging.getLogger(__name__)


def build_data_uri(raw: bytes, mime: str) -> str:
    return f"data:{mime};base64,{base64.b64encode(raw).decode()}"


def read_as_data_uri(document: Document) -> str:
    try:
        return build_data_uri(document.content, document.mime_type)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Could not read file {document.name!r}: {e}") from e


def _strip_prefix(data_uri: str) -> str:
    # "data:image/jpeg;base64,<payload>" -> "<payload>"
    _, sep, payload = data_uri.partition(",")
    if not sep or not payload:
        raise EncodingError("Could not convert file to base64.")
    return payload


async def file_to_base64(document: Document) -> str:
    """Return the raw base-64 payload of ``document``; raises EncodingError."""
    data_uri = await asyncio.to_thread(read_as_data_uri, document)
    payload = _strip_prefix(data_uri)
    logger.debug("Encoded %s: %d bytes -> %d chars", document.name, len(document.content), len(payload))
    return payload
