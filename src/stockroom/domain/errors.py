"""Domain errors.

Two families:
    InventoryError: raised by the CRUD layer (missing rows, uniqueness).
    ChatbotError: raised by the orchestration loop and tool registry.

Neither family is caught inside the domain; the HTTP layer maps them to
status codes in one place (see main.py).
"""

from __future__ import annotations

from typing import Any


class InventoryError(Exception):
    """Base class for CRUD-layer failures."""


class NotFound(InventoryError):
    """A referenced entity id does not exist."""


class Conflict(InventoryError):
    """A uniqueness rule would be violated (name, SKU, product/location pair)."""


class ChatbotError(Exception):
    """Base class for failures of a chat exchange."""


class UnknownTool(ChatbotError):
    """The model requested a function that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown function call: {name}")
        self.name = name


class ToolCallLoopExceeded(ChatbotError):
    """The model kept requesting tools past the configured round-trip bound."""

    def __init__(self, limit: int):
        super().__init__(f"Model still requesting tools after {limit} round trips")
        self.limit = limit


class InvalidToolArguments(ChatbotError):
    """The model called a tool with arguments its argument model rejects."""

    def __init__(self, name: str, errors: list[dict[str, Any]]):
        super().__init__(f"Invalid arguments for {name}: {len(errors)} validation error(s)")
        self.name = name
        self.errors = errors


class NoAnswerProduced(ChatbotError):
    """The model finished without tool calls and without any text."""


class RoundTripTimeout(ChatbotError):
    """A model call or tool invocation exceeded its time budget."""

    def __init__(self, stage: str, seconds: float):
        super().__init__(f"{stage} timed out after {seconds:g}s")
        self.stage = stage
        self.seconds = seconds


__all__ = [
    "ChatbotError",
    "Conflict",
    "InvalidToolArguments",
    "InventoryError",
    "NoAnswerProduced",
    "NotFound",
    "RoundTripTimeout",
    "ToolCallLoopExceeded",
    "UnknownTool",
]
