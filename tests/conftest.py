import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from chat_relay.core.config import Settings
from chat_relay.providers.base import ProviderResponse
from chat_relay.server import app

MODEL_ID = "@cf/meta/llama-3.3-70b-instruct-fp8-fast"

TEST_SETTINGS = Settings(model_id=MODEL_ID, max_tokens=1024, system_prompt="You are a test assistant.")

SSE_CHUNKS = [
    b'data: {"response":"Hel"}\n\n',
    b'data: {"response":"lo"}\n\n',
    b"data: [DONE]\n\n",
]


class FakeProvider:
    def __init__(self, chunks=None, status_code=200, headers=None, error=None, stream_error=None):
        self.chunks = SSE_CHUNKS if chunks is None else chunks
        self.status_code = status_code
        self.headers = headers if headers is not None else [("content-type", "text/event-stream")]
        self.error = error
        # Raised by the body once all chunks have been yielded
        self.stream_error = stream_error
        self.calls = []
        self.closed = False

    async def run(self, model, messages, options):
        self.calls.append({"model": model, "messages": messages, "options": options})
        if self.error is not None:
            raise self.error

        async def body():
            for chunk in self.chunks:
                yield chunk
            if self.stream_error is not None:
                raise self.stream_error

        async def close():
            self.closed = True

        return ProviderResponse(
            status_code=self.status_code,
            headers=list(self.headers),
            body=body(),
            close=close,
        )


class FakeAssets:
    def __init__(self):
        self.paths = []

    async def fetch(self, request):
        self.paths.append(request.url.path)
        return PlainTextResponse(f"asset:{request.url.path}")


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def assets():
    return FakeAssets()


@pytest.fixture
def client(monkeypatch, provider, assets):
    monkeypatch.setattr(app.state, "provider", provider)
    monkeypatch.setattr(app.state, "assets", assets)
    monkeypatch.setattr(app.state, "settings", TEST_SETTINGS)
    return TestClient(app)
