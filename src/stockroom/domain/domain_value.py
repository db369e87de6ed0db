"""Identity Layer - Conversation Turns and History.

This module defines the turn vocabulary the orchestration loop records and
maps each turn onto Pydantic AI's content types when history is replayed to
the model.

Architecture:
    - Turns (our layer): UserText, ModelText, ModelToolCall, ToolResult
    - Content (Pydantic AI): ModelMessage (ModelRequest | ModelResponse)
    - History (our layer): ordered, immutable tuple of turns keyed by an id

Keeping our own turn types (instead of storing ModelMessage directly) gives
the store a small, provider-neutral JSON shape and lets tests assert on the
exact sequence of turns an exchange produced.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    TextPart,
    ToolCallPart,
    ToolReturnPart,
    UserPromptPart,
)

from .domain_type import TurnRole


class UserText(BaseModel):
    """Text typed by the user. Opens every exchange."""

    kind: Literal["user_text"] = "user_text"
    text: str

    model_config = ConfigDict(frozen=True)

    @property
    def role(self) -> TurnRole:
        return TurnRole.USER

    def to_message(self) -> ModelMessage:
        return ModelRequest(parts=[UserPromptPart(content=self.text)])


class ModelText(BaseModel):
    """Final natural-language answer of the model."""

    kind: Literal["model_text"] = "model_text"
    text: str

    model_config = ConfigDict(frozen=True)

    @property
    def role(self) -> TurnRole:
        return TurnRole.MODEL

    def to_message(self) -> ModelMessage:
        return ModelResponse(parts=[TextPart(content=self.text)])


class ModelToolCall(BaseModel):
    """A function call the model issued, exactly as it was honoured."""

    kind: Literal["model_tool_call"] = "model_tool_call"
    tool_name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    call_id: str

    model_config = ConfigDict(frozen=True)

    @property
    def role(self) -> TurnRole:
        return TurnRole.MODEL

    def to_message(self) -> ModelMessage:
        return ModelResponse(
            parts=[ToolCallPart(tool_name=self.tool_name, args=dict(self.arguments), tool_call_id=self.call_id)]
        )


class ToolResult(BaseModel):
    """JSON-compatible result of a tool call, replayed on the user side."""

    kind: Literal["tool_result"] = "tool_result"
    tool_name: str
    result: Any = None
    call_id: str

    model_config = ConfigDict(frozen=True)

    @property
    def role(self) -> TurnRole:
        return TurnRole.USER

    def to_message(self) -> ModelMessage:
        return ModelRequest(
            parts=[
                ToolReturnPart(
                    tool_name=self.tool_name,
                    content={"result": self.result},
                    tool_call_id=self.call_id,
                )
            ]
        )


Turn = Annotated[UserText | ModelText | ModelToolCall | ToolResult, Field(discriminator="kind")]


class ConversationHistory(BaseModel):
    """Complete Conversation State for Persistence.

    Attributes:
        id: Opaque conversation key chosen by the caller (None for one-off exchanges)
        turns: Ordered tuple of turns (immutable for functional updates)

    Invariant:
        Every ModelToolCall is immediately followed by its ToolResult. The loop
        appends the pair together, so a persisted history never ends mid-call.
    """

    id: str | None = None
    turns: tuple[Turn, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def messages(self) -> list[ModelMessage]:
        """Pydantic AI messages for a model request, in turn order."""
        return [turn.to_message() for turn in self.turns]

    @property
    def last_turn(self) -> Turn | None:
        return self.turns[-1] if self.turns else None

    def append(self, *turns: Turn) -> ConversationHistory:
        """Append turns immutably; the original instance is unchanged."""
        return self.model_copy(update={"turns": (*self.turns, *turns)})


__all__ = [
    "ConversationHistory",
    "ModelText",
    "ModelToolCall",
    "ToolResult",
    "Turn",
    "UserText",
]
