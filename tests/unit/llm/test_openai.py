"""
Tests for OpenAI Provider.

Tests OpenAI provider implementation with mocked API calls.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai

from fkdoctor.llm.openai import OpenAIProvider
from fkdoctor.llm.models import LLMRequest, LLMMessage


@pytest.fixture
def provider():
    """Create OpenAI provider instance."""
    return OpenAIProvider(
        api_key="sk-test-key-1234567890abcdefghij",
        model="gpt-4",
        temperature=0.0,
        max_tokens=256,
        timeout=30,
    )


def _mock_response(content="FK_818C32519EB6921", finish_reason="stop"):
    mock_response = MagicMock()
    mock_response.choices = [MagicMock()]
    mock_response.choices[0].message.content = content
    mock_response.choices[0].finish_reason = finish_reason
    mock_response.model = "gpt-4"
    mock_response.usage.prompt_tokens = 120
    mock_response.usage.completion_tokens = 8
    mock_response.usage.total_tokens = 128
    return mock_response


class TestOpenAIProviderInit:
    """Test OpenAI provider initialization."""

    def test_initialization(self, provider):
        """Test provider initializes correctly."""
        assert provider.model == "gpt-4"
        assert provider.temperature == 0.0
        assert provider.max_tokens == 256
        assert provider.timeout == 30
        assert provider.provider_name == "openai"

    def test_client_created(self, provider):
        """Test AsyncOpenAI client is created."""
        assert provider.client is not None


class TestGenerate:
    """Test generate method."""

    @pytest.mark.asyncio
    async def test_successful_generation(self, provider):
        """Test successful completion generation."""
        with patch.object(
            provider.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=_mock_response(),
        ):
            request = LLMRequest(
                messages=[LLMMessage(role="user", content="Extract the name")],
            )
            response = await provider.generate(request)

            assert response.content == "FK_818C32519EB6921"
            assert response.model == "gpt-4"
            assert response.usage.total_tokens == 128
            assert response.finish_reason == "stop"

    @pytest.mark.asyncio
    async def test_applies_defaults(self, provider):
        """Test request defaults are applied."""
        mock_create = AsyncMock(return_value=_mock_response())

        with patch.object(provider.client.chat.completions, "create", mock_create):
            request = LLMRequest(
                messages=[LLMMessage(role="user", content="Test")],
            )
            await provider.generate(request)

            call_kwargs = mock_create.call_args.kwargs
            assert call_kwargs["model"] == "gpt-4"
            assert call_kwargs["temperature"] == 0.0
            assert call_kwargs["max_tokens"] == 256
            assert call_kwargs["messages"] == [{"role": "user", "content": "Test"}]

    @pytest.mark.asyncio
    async def test_request_overrides_defaults(self, provider):
        """Test request can override defaults."""
        mock_create = AsyncMock(return_value=_mock_response())

        with patch.object(provider.client.chat.completions, "create", mock_create):
            request = LLMRequest(
                messages=[LLMMessage(role="user", content="Test")],
                temperature=0.7,
                max_tokens=500,
                model="gpt-4o",
            )
            await provider.generate(request)

            call_kwargs = mock_create.call_args.kwargs
            assert call_kwargs["temperature"] == 0.7
            assert call_kwargs["max_tokens"] == 500
            assert call_kwargs["model"] == "gpt-4o"

    @pytest.mark.asyncio
    async def test_empty_content_becomes_empty_string(self, provider):
        with patch.object(
            provider.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=_mock_response(content=None),
        ):
            request = LLMRequest(messages=[LLMMessage(role="user", content="Test")])
            response = await provider.generate(request)

            assert response.content == ""

    @pytest.mark.asyncio
    async def test_api_error_propagates(self, provider):
        error = openai.APIConnectionError(
            request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        )
        with patch.object(
            provider.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            side_effect=error,
        ):
            request = LLMRequest(messages=[LLMMessage(role="user", content="Test")])

            with pytest.raises(openai.APIError):
                await provider.generate(request)

    @pytest.mark.asyncio
    async def test_request_defaults_do_not_mutate_caller_request(self, provider):
        with patch.object(
            provider.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=_mock_response(),
        ):
            request = LLMRequest(messages=[LLMMessage(role="user", content="Test")])
            await provider.generate(request)

            assert request.temperature is None
            assert request.max_tokens is None

    @pytest.mark.asyncio
    async def test_missing_usage_and_raw_finish_reason(self, provider):
        mock_response = _mock_response(finish_reason="tool_calls")
        mock_response.usage = None
        with patch.object(
            provider.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=mock_response,
        ):
            request = LLMRequest(messages=[LLMMessage(role="user", content="Test")])
            response = await provider.generate(request)

            assert response.usage is None
            assert response.finish_reason == "tool_calls"
