import pytest
from fastapi.testclient import TestClient

from imagechat.main import app
from imagechat.services.llm_service import get_llm_service

# A small 1x1 PNG base64 image (black pixel)
SAMPLE_IMAGE_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/w8AAn8B9pQn2wAAAABJRU5ErkJggg=="
)
SAMPLE_IMAGE_URI = f"data:image/png;base64,{SAMPLE_IMAGE_BASE64}"


class FakeLLM:
    """Stands in for LLMService; replies from a queue and records every call."""

    def __init__(self, responses=None, error: Exception | None = None):
        self.responses = list(responses or [])
        self.error = error
        self.calls = []

    async def chat_completion(self, messages, system_prompt=None, max_tokens=None):
        self.calls.append(
            {"messages": messages, "system_prompt": system_prompt, "max_tokens": max_tokens}
        )
        if self.error:
            raise self.error
        return self.responses.pop(0) if self.responses else ""


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def override_llm(fake_llm):
    app.dependency_overrides[get_llm_service] = lambda: fake_llm
    yield fake_llm
    app.dependency_overrides.clear()


@pytest.fixture
def client(override_llm):
    with TestClient(app) as c:
        yield c
