"""Domain Layer - Business Logic and Rich Models.

This module provides the core domain layer built on Pydantic AI's native types.
Architecture follows Domain-Driven Design with immutable models and explicit
dependencies.

Key Components:
    - Conversation: Aggregate root running the model/tool loop of one exchange
    - ConversationHistory: Immutable turn sequence with persistence identity
    - ToolRegistry: Name -> tool dispatch over the inventory services
    - GenerativeModelClient: One model request/response per call
    - Schemas: Validated inputs and read models of the inventory entities

Design Principles:
    - Pydantic AI Native: Use Pydantic AI types directly, minimal wrapping
    - Immutable by Default: Domain models use frozen=True for algebraic operations
    - Explicit Dependencies: No hidden state, all dependencies passed explicitly
    - Type-Safe Throughout: Leverage Pydantic's validation at every boundary
"""

from .conversation import SYSTEM_INSTRUCTIONS, Conversation
from .domain_type import ConversationBackend, ToolGroup, TurnRole
from .domain_value import ConversationHistory, ModelText, ModelToolCall, ToolResult, Turn, UserText
from .errors import (
    ChatbotError,
    Conflict,
    InvalidToolArguments,
    InventoryError,
    NoAnswerProduced,
    NotFound,
    RoundTripTimeout,
    ToolCallLoopExceeded,
    UnknownTool,
)
from .model_client import GenerativeModelClient
from .tools import ToolRegistry, ToolSchema, ToolSpec, build_tool_registry

__all__ = [
    "SYSTEM_INSTRUCTIONS",
    "ChatbotError",
    "Conflict",
    "Conversation",
    "ConversationBackend",
    "ConversationHistory",
    "GenerativeModelClient",
    "InvalidToolArguments",
    "InventoryError",
    "ModelText",
    "ModelToolCall",
    "NoAnswerProduced",
    "NotFound",
    "RoundTripTimeout",
    "ToolCallLoopExceeded",
    "ToolGroup",
    "ToolRegistry",
    "ToolResult",
    "ToolSchema",
    "ToolSpec",
    "Turn",
    "TurnRole",
    "UnknownTool",
    "UserText",
    "build_tool_registry",
]
