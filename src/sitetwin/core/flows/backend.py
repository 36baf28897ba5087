# backend.py: text-generation backends for flows
#
# A backend turns a rendered prompt into raw model text. Flows own schema
# validation; backends only own transport.

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Protocol

import openai
from dotenv import load_dotenv
from openai import AsyncOpenAI

from sitetwin.core.flows.errors import FlowOutputError, FlowTransportError

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
SYSTEM_PROMPT = (
    "You support the operators of a construction site digital twin. "
    "Answer only with JSON that matches the requested schema."
)


class LLMBackend(Protocol):
    async def complete(self, flow: str, prompt: str, json_schema: dict[str, Any]) -> str:
        """Return the raw text produced for `prompt`."""
        ...


class OpenAIBackend:
    """Backend using OpenAI's Chat Completions API in JSON mode."""

    def __init__(self, model: str = DEFAULT_MODEL, client: Optional[AsyncOpenAI] = None):
        self.model = model
        self._client = client

    def _get_client(self, flow: str) -> AsyncOpenAI:
        if self._client is None:
            try:
                self._client = AsyncOpenAI(api_key=os.getenv("OPENAI_API_KEY"))
            except openai.OpenAIError as exc:
                raise FlowTransportError(flow, f"LLM client unavailable: {exc}") from exc
        return self._client

    async def complete(self, flow: str, prompt: str, json_schema: dict[str, Any]) -> str:
        client = self._get_client(flow)
        kwargs: dict[str, Any] = {}
        # JSON mode only accepts object roots; list outputs rely on the prompt
        if json_schema.get("type") == "object":
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                **kwargs,
            )
        except openai.OpenAIError as exc:
            raise FlowTransportError(flow, f"LLM request failed: {exc}") from exc

        if not response.choices or response.choices[0].message.content is None:
            raise FlowOutputError(flow, "LLM returned an empty response")
        return response.choices[0].message.content
