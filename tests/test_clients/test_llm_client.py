"""Tests for LLMClient (Claude API wrapper)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import pytest

from elevate_cv.clients.llm_client import LLMClient, LLMResponse
from elevate_cv.errors import TransportError


def _make_api_message(text: str, input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Build a mock anthropic Message-like object."""
    message = MagicMock()
    message.usage.input_tokens = input_tokens
    message.usage.output_tokens = output_tokens
    message.content = [MagicMock(type="text", text=text)]
    return message


def _patched_client(mock_cls, create: AsyncMock) -> MagicMock:
    mock_client = MagicMock()
    mock_client.messages.create = create
    mock_cls.return_value = mock_client
    return mock_client


class TestLLMClientInit:
    def test_init_default_creates_client_with_no_kwargs(self):
        with patch("elevate_cv.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            LLMClient()
            mock_cls.assert_called_once_with()

    def test_init_with_both_params_passes_both(self):
        with patch("elevate_cv.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            LLMClient(api_key="test-key", timeout=30.0)
            mock_cls.assert_called_once_with(api_key="test-key", timeout=30.0)


class TestLLMClientGenerate:
    async def test_generate_returns_llm_response(self):
        with patch("elevate_cv.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            _patched_client(mock_cls, AsyncMock(return_value=_make_api_message("hello world")))
            llm = LLMClient()
            result = await llm.generate("say hello")

        assert isinstance(result, LLMResponse)
        assert result.text == "hello world"
        assert result.input_tokens == 100
        assert result.output_tokens == 50

    async def test_schema_goes_into_system_prompt(self):
        with patch("elevate_cv.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            create = AsyncMock(return_value=_make_api_message("{}"))
            _patched_client(mock_cls, create)
            llm = LLMClient()
            await llm.generate(
                "prompt",
                system="Be brief.",
                response_schema={"type": "object", "required": ["theme"]},
            )

        system = create.call_args.kwargs["system"]
        assert system.startswith("Be brief.")
        assert "JSON Schema" in system
        assert '"theme"' in system

    async def test_no_system_prompt_when_empty(self):
        with patch("elevate_cv.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            create = AsyncMock(return_value=_make_api_message("ok"))
            _patched_client(mock_cls, create)
            await LLMClient().generate("prompt")

        assert "system" not in create.call_args.kwargs

    async def test_api_error_becomes_transport_error_without_retry(self):
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        error = anthropic.APIConnectionError(request=request)
        with patch("elevate_cv.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            create = AsyncMock(side_effect=error)
            _patched_client(mock_cls, create)
            llm = LLMClient()
            with pytest.raises(TransportError, match="AI service error"):
                await llm.generate("prompt")

        assert create.await_count == 1

    async def test_token_log_stores_model_and_counts(self):
        with patch("elevate_cv.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            _patched_client(
                mock_cls,
                AsyncMock(return_value=_make_api_message("resp", input_tokens=20, output_tokens=8)),
            )
            llm = LLMClient()
            await llm.generate("prompt", model="claude-haiku-4-5-20251001")

        model, inp, out = llm._token_log[0]
        assert model == "claude-haiku-4-5-20251001"
        assert inp == 20
        assert out == 8


class TestLLMClientTokenSummary:
    def test_get_token_summary_returns_totals_and_clears(self):
        with patch("elevate_cv.clients.llm_client.anthropic.AsyncAnthropic"):
            llm = LLMClient()
            llm._token_log = [
                ("claude-haiku-4-5-20251001", 100, 50),
                ("claude-sonnet-4-5-20250929", 200, 80),
            ]

        summary = llm.get_token_summary()
        assert summary["input"] == 300
        assert summary["output"] == 130
        assert len(summary["calls"]) == 2
        assert llm.get_token_summary()["calls"] == []
