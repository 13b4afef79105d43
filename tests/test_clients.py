import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from brandmatch.clients import openai_client as oai_client_module
from brandmatch.clients.openai_client import OpenAIClient


@pytest.fixture(autouse=True)
def reset_openai_singleton():
    OpenAIClient._instance = None
    OpenAIClient._initialized = False
    yield
    OpenAIClient._instance = None
    OpenAIClient._initialized = False


def test_openai_client_requires_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with patch.object(oai_client_module, "OPENAI_API_KEY", None):
        with pytest.raises(ValueError):
            OpenAIClient()

    assert OpenAIClient._initialized is False


def test_openai_client_is_a_singleton():
    with patch.object(oai_client_module, "OPENAI_API_KEY", "sk-test"), \
         patch.object(oai_client_module, "AsyncOpenAI") as mock_async_openai:
        first = OpenAIClient()
        second = OpenAIClient()

    assert first is second
    mock_async_openai.assert_called_once_with(api_key="sk-test")


@pytest.mark.asyncio
async def test_chat_completions_create_forwards_and_reraises():
    with patch.object(oai_client_module, "OPENAI_API_KEY", "sk-test"), \
         patch.object(oai_client_module, "AsyncOpenAI") as mock_async_openai:
        sdk = MagicMock()
        sdk.chat.completions.create = AsyncMock(side_effect=[{"id": "ok"}, RuntimeError("quota")])
        mock_async_openai.return_value = sdk
        client = OpenAIClient()

        response = await client.chat_completions_create(model="gpt-4o-mini", messages=[])
        with pytest.raises(RuntimeError):
            await client.chat_completions_create(model="gpt-4o-mini", messages=[])

    assert response == {"id": "ok"}
    sdk.chat.completions.create.assert_any_await(model="gpt-4o-mini", messages=[])
