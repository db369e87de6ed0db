"""Test doubles for the model side of the chat loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from pydantic_ai.messages import ModelMessage, ModelResponse, TextPart, ToolCallPart
from pydantic_ai.models.function import AgentInfo, FunctionModel

from stockroom.domain.model_client import GenerativeModelClient


def text(content: str) -> ModelResponse:
    return ModelResponse(parts=[TextPart(content=content)])


def tool_call(name: str, args: dict[str, Any] | None = None, call_id: str | None = None) -> ModelResponse:
    ids = {"tool_call_id": call_id} if call_id is not None else {}
    return ModelResponse(parts=[ToolCallPart(tool_name=name, args=args or {}, **ids)])


class ScriptedModel:
    """
    Replays canned responses in order, repeating the last one forever.

    Each entry is a ModelResponse or a callable taking the messages of the
    call. Every call's messages and AgentInfo are recorded for assertions.
    """

    def __init__(self, *responses: ModelResponse | Callable[[list[ModelMessage]], ModelResponse], delay: float = 0):
        if not responses:
            raise ValueError("ScriptedModel needs at least one response")
        self.responses = list(responses)
        self.delay = delay
        self.calls: list[list[ModelMessage]] = []
        self.infos: list[AgentInfo] = []
        self.model = FunctionModel(self._respond)

    @property
    def client(self) -> GenerativeModelClient:
        return GenerativeModelClient(self.model)

    async def _respond(self, messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
        self.calls.append(list(messages))
        self.infos.append(info)
        await asyncio.sleep(self.delay)
        response = self.responses[min(len(self.calls), len(self.responses)) - 1]
        return response(messages) if callable(response) else response
