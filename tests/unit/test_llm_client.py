# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for LLMClient.

LiteLLM's acompletion is patched; no provider is contacted.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import SecretStr

from edconnect.core.config.settings import LLMSettings
from edconnect.core.llm.client import LLMClient, LLMError, LLMResponse


def _llm_settings(**overrides) -> LLMSettings:
    values = {
        "anthropic_api_key": SecretStr("sk-ant-test"),
        "tutor_model": "anthropic/claude-sonnet-4-20250514",
        "temperature": 0.7,
        "request_timeout": 60.0,
        "max_retries": 2,
    }
    values.update(overrides)
    return LLMSettings(**values)


def _completion(content: str, prompt_tokens: int = 12, completion_tokens: int = 30) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    response.choices[0].finish_reason = "stop"
    response.usage.prompt_tokens = prompt_tokens
    response.usage.completion_tokens = completion_tokens
    return response


class TestLLMClientInit:
    """Test cases for LLMClient initialization."""

    def test_defaults_come_from_settings(self) -> None:
        client = LLMClient(llm_settings=_llm_settings())

        assert client.model == "anthropic/claude-sonnet-4-20250514"
        assert client.timeout == 60.0
        assert client.max_retries == 2

    def test_explicit_arguments_override_settings(self) -> None:
        client = LLMClient(
            model="anthropic/claude-3-haiku",
            timeout=5.0,
            max_retries=0,
            llm_settings=_llm_settings(),
        )

        assert client.model == "anthropic/claude-3-haiku"
        assert client.timeout == 5.0
        assert client.max_retries == 0


class TestLLMClientCompletion:
    """Test cases for completions."""

    @pytest.mark.asyncio
    async def test_completion_passes_messages_and_settings(self) -> None:
        """Test that messages and settings reach acompletion()."""
        client = LLMClient(llm_settings=_llm_settings())

        with patch(
            "edconnect.core.llm.client.acompletion",
            new=AsyncMock(return_value=_completion("What is a coefficient?")),
        ) as mock_completion:
            response = await client.complete_with_messages(
                [
                    {"role": "system", "content": "You are a Socratic tutor."},
                    {"role": "user", "content": "Explain quadratics"},
                ],
                max_tokens=256,
            )

        assert isinstance(response, LLMResponse)
        assert response.content == "What is a coefficient?"
        assert response.total_tokens == 42

        kwargs = mock_completion.call_args.kwargs
        assert kwargs["messages"] == [
            {"role": "system", "content": "You are a Socratic tutor."},
            {"role": "user", "content": "Explain quadratics"},
        ]
        assert kwargs["max_tokens"] == 256
        assert kwargs["temperature"] == 0.7
        assert kwargs["num_retries"] == 2
        assert kwargs["api_key"] == "sk-ant-test"

    @pytest.mark.asyncio
    async def test_no_api_key_is_not_passed(self) -> None:
        client = LLMClient(llm_settings=_llm_settings(anthropic_api_key=None))

        with patch(
            "edconnect.core.llm.client.acompletion",
            new=AsyncMock(return_value=_completion("Hi")),
        ) as mock_completion:
            await client.complete_with_messages([{"role": "user", "content": "Hi"}])

        assert "api_key" not in mock_completion.call_args.kwargs

    @pytest.mark.asyncio
    async def test_empty_content_becomes_empty_string(self) -> None:
        client = LLMClient(llm_settings=_llm_settings())

        with patch(
            "edconnect.core.llm.client.acompletion",
            new=AsyncMock(return_value=_completion(None)),
        ):
            response = await client.complete_with_messages([{"role": "user", "content": "Hi"}])

        assert response.content == ""

    @pytest.mark.asyncio
    async def test_provider_failure_raises_llm_error(self) -> None:
        """Test that provider exceptions are wrapped in LLMError."""
        client = LLMClient(llm_settings=_llm_settings())

        with patch(
            "edconnect.core.llm.client.acompletion",
            new=AsyncMock(side_effect=RuntimeError("overloaded")),
        ):
            with pytest.raises(LLMError) as exc_info:
                await client.complete_with_messages([{"role": "user", "content": "Hi"}])

        assert exc_info.value.model == "anthropic/claude-sonnet-4-20250514"
        assert isinstance(exc_info.value.original_error, RuntimeError)

    @pytest.mark.asyncio
    async def test_empty_messages_raise_value_error(self) -> None:
        client = LLMClient(llm_settings=_llm_settings())

        with pytest.raises(ValueError, match="cannot be empty"):
            await client.complete_with_messages([])
