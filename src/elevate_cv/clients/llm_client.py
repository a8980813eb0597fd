"""Claude API wrapper with async support.

Calls are issued once; a failure is terminal for the operation that made it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass

import anthropic

from elevate_cv.errors import TransportError

logger = logging.getLogger(__name__)

SCHEMA_INSTRUCTION = """\
Respond with a single JSON object and nothing else. No prose, no code fences.
The object must conform to this JSON Schema:
{schema}"""


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Async Claude API client."""

    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str = "claude-haiku-4-5-20251001",
        temperature: float = 0.0,
        max_tokens: int = 4096,
        response_schema: dict | None = None,
    ) -> LLMResponse:
        """Send a prompt to Claude and return the text response with usage.

        When ``response_schema`` is given, the schema is appended to the system
        prompt and the reply is expected to be a bare JSON document. Checking
        that it actually is belongs to the caller.
        """
        if response_schema is not None:
            instruction = SCHEMA_INSTRUCTION.format(
                schema=json.dumps(response_schema, indent=2)
            )
            system = f"{system}\n\n{instruction}" if system else instruction

        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            kwargs["system"] = system

        logger.debug("LLM call: model=%s schema=%s", model, response_schema is not None)
        try:
            message = await self.client.messages.create(**kwargs)
        except anthropic.APIError as e:
            logger.error("LLM call failed", exc_info=True)
            raise TransportError(f"AI service error: {e}") from e

        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))
        text = "".join(
            block.text for block in message.content if getattr(block, "type", "text") == "text"
        )
        return LLMResponse(
            text=text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
