import httpx
import pytest

from imagechat.cli import handle_line
from imagechat.client.session import ImageChatSession
from imagechat.client.state import image_rejected
from imagechat.main import app


def make_session() -> ImageChatSession:
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
    return ImageChatSession(http)


@pytest.mark.asyncio
async def test_quit_stops_the_loop():
    session = make_session()
    assert await handle_line(session, "/quit") is False
    await session.http.aclose()


@pytest.mark.asyncio
async def test_language_command(capsys):
    session = make_session()
    assert await handle_line(session, "/lang fr")
    assert session.state.language == "fr"

    assert await handle_line(session, "/lang xx")
    assert session.state.language == "fr"
    assert "Unknown language" in capsys.readouterr().err
    await session.http.aclose()


@pytest.mark.asyncio
async def test_dismiss_command():
    session = make_session()
    session.store.dispatch(image_rejected, "bad file")
    await handle_line(session, "/dismiss")
    assert session.state.error is None
    await session.http.aclose()


@pytest.mark.asyncio
async def test_plain_text_is_sent_as_chat(override_llm):
    override_llm.responses = ["Hi there"]
    session = make_session()
    await handle_line(session, "hello")
    assert [m.content for m in session.state.messages[-2:]] == ["hello", "Hi there"]
    await session.http.aclose()
