import base64
from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest
from openai import APIConnectionError

from agents.image_query_agent.agent.openai_image_query_agent import NO_RESPONSE, OpenAIImageQueryAgent
from agents.image_query_agent.exceptions import ConfigurationError, UpstreamError
from agents.image_query_agent.schemas import QueryImage

IMAGE = QueryImage(filename="part.png", content_type="image/png", data=b"\x89PNG-bytes")


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def agent() -> OpenAIImageQueryAgent:
    agent = OpenAIImageQueryAgent(api_key="sk-test", model="gpt-4o", max_tokens=400)
    agent.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=AsyncMock())))
    return agent


def test_client_never_retries():
    agent = OpenAIImageQueryAgent(api_key="sk-test")

    assert agent.client.max_retries == 0


@pytest.mark.asyncio
async def test_missing_api_key_is_a_configuration_error():
    agent = OpenAIImageQueryAgent(api_key=None)

    with pytest.raises(ConfigurationError, match="Missing OpenAI API key."):
        await agent.answer("What is this?", IMAGE)


@pytest.mark.asyncio
async def test_sends_question_and_data_url(agent):
    agent.client.chat.completions.create.return_value = completion("A cat.")

    answer = await agent.answer("What is this?", IMAGE)

    assert answer == "A cat."
    kwargs = agent.client.chat.completions.create.await_args.kwargs
    assert kwargs["model"] == "gpt-4o"
    assert kwargs["max_tokens"] == 400
    text_part, image_part = kwargs["messages"][0]["content"]
    assert text_part == {"type": "text", "text": "What is this?"}
    expected_url = "data:image/png;base64," + base64.b64encode(IMAGE.data).decode("utf-8")
    assert image_part["image_url"]["url"] == expected_url


@pytest.mark.asyncio
async def test_empty_content_falls_back_to_no_response(agent):
    agent.client.chat.completions.create.return_value = completion(None)

    assert await agent.answer("What is this?", IMAGE) == NO_RESPONSE


@pytest.mark.asyncio
async def test_openai_failure_becomes_upstream_error(agent):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    agent.client.chat.completions.create.side_effect = APIConnectionError(request=request)

    with pytest.raises(UpstreamError, match="OpenAI API error"):
        await agent.answer("What is this?", IMAGE)

    agent.client.chat.completions.create.assert_awaited_once()
