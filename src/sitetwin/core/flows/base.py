"""
Schema-validated request/response calls to a text-generation backend.

A flow validates its input against a pydantic model, renders a prompt
template, asks the backend for JSON and validates the answer against the
output type. Every failure surfaces as a FlowError subclass; a flow never
returns a partially populated result.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from string import Template
from typing import Any, ClassVar, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from sitetwin.core.flows.backend import LLMBackend
from sitetwin.core.flows.errors import FlowError, FlowInputError, FlowOutputError

logger = logging.getLogger(__name__)

InT = TypeVar("InT", bound=BaseModel)
OutT = TypeVar("OutT")

_FENCE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Models sometimes wrap JSON in a markdown code fence."""
    match = _FENCE.match(text)
    return match.group(1) if match else text.strip()


@dataclass(frozen=True)
class FlowResult(Generic[OutT]):
    ok: bool
    data: Optional[OutT] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, data: OutT) -> "FlowResult[OutT]":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "FlowResult[OutT]":
        return cls(ok=False, error=error)


class Flow(Generic[InT, OutT]):
    """Base class; subclasses set name, input_model, output_type and prompt."""

    name: ClassVar[str]
    input_model: ClassVar[Type[BaseModel]]
    output_type: ClassVar[Any]
    prompt: ClassVar[Template]

    def __init__(self, backend: LLMBackend):
        self.backend = backend
        self._output_adapter: TypeAdapter = TypeAdapter(self.output_type)

    @property
    def output_schema(self) -> dict[str, Any]:
        return self._output_adapter.json_schema()

    def validate_input(self, data: Union[InT, dict[str, Any]]) -> InT:
        try:
            if isinstance(data, self.input_model):
                return self.input_model.model_validate(data.model_dump())
            return self.input_model.model_validate(data)
        except ValidationError as exc:
            raise FlowInputError(self.name, f"invalid input: {exc.error_count()} error(s): {exc}") from exc

    def render(self, data: InT) -> str:
        fields = {key: _format_field(value) for key, value in data.model_dump().items()}
        body = self.prompt.substitute(fields)
        schema = json.dumps(self.output_schema, indent=2)
        return f"{body}\n\nRespond with JSON matching this schema:\n{schema}"

    def parse_output(self, text: str) -> OutT:
        try:
            return self._output_adapter.validate_json(strip_code_fence(text), strict=True)
        except ValidationError as exc:
            raise FlowOutputError(self.name, f"output failed validation: {exc}") from exc

    async def run(self, data: Union[InT, dict[str, Any]]) -> OutT:
        request = self.validate_input(data)
        prompt = self.render(request)
        logger.debug(f"Running flow {self.name}")
        text = await self.backend.complete(self.name, prompt, self.output_schema)
        return self.parse_output(text)

    async def run_safe(self, data: Union[InT, dict[str, Any]]) -> FlowResult[OutT]:
        """Like run(), but reports failures in the result instead of raising."""
        try:
            return FlowResult.success(await self.run(data))
        except FlowError as exc:
            logger.error(f"Flow {self.name} failed: {exc}")
            return FlowResult.failure(exc.message)


def _format_field(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
