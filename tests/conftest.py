"""
Shared fixtures: a fake Mistral SDK object so no test touches the network.
"""
import asyncio
from types import SimpleNamespace

import pytest

from text_extractor.config import Settings
from text_extractor.extraction_client import ExtractionClient
from text_extractor.schemas import Document
from text_extractor.session import SessionController

# Smallest valid PNG header plus a few payload bytes
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"


def chat_response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeChat:
    def __init__(self):
        self.calls = []
        self.response = chat_response("Hello\nWorld")
        self.error = None
        self.gate = None

    async def complete_async(self, **kwargs):
        self.calls.append(kwargs)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.response


class FakeMistral:
    def __init__(self):
        self.chat = FakeChat()

    def reply(self, content):
        self.chat.response = chat_response(content)

    def fail(self, error: Exception):
        self.chat.error = error

    def hold(self) -> asyncio.Event:
        """Block requests until the returned event is set. Call inside a running loop."""
        self.chat.gate = asyncio.Event()
        return self.chat.gate


@pytest.fixture
def settings():
    return Settings(api_key="test-key", model="test-model")


@pytest.fixture
def fake_mistral():
    return FakeMistral()


@pytest.fixture
def client(settings, fake_mistral):
    return ExtractionClient(settings, client=fake_mistral)


@pytest.fixture
def controller(client):
    return SessionController(client)


@pytest.fixture
def png_document():
    return Document(content=PNG_BYTES, mime_type="image/png", name="scan.png")
