"""Conversation Aggregate - Tool-Calling Loop for the Inventory Assistant.

This module implements the Conversation aggregate root, which runs one user
exchange against the model: send history, honour a requested tool call, feed
the result back, repeat until the model answers with text.

Loop States:
    AwaitingModelResponse -> ToolCallRequested -> AwaitingModelResponse
    AwaitingModelResponse -> FinalAnswerReady (terminal)

Only the first tool call of a response is honoured. Every round trip is
bounded by an optional timeout and the number of model calls per exchange is
bounded by max_round_trips. A tool requested by the last allowed model call
is never dispatched, so an aborted exchange performs no writes past the bound.

Key Components:
    - Conversation: Main aggregate (immutable, returns a new instance per exchange)
    - SYSTEM_INSTRUCTIONS: Relational schema the model answers questions about
    - ConversationHistory: Persistence-ready state container (see domain_value)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic_ai.messages import TextPart, ToolCallPart
from pydantic_core import to_jsonable_python

from .domain_value import ConversationHistory, ModelText, ModelToolCall, ToolResult, UserText
from .errors import NoAnswerProduced, RoundTripTimeout, ToolCallLoopExceeded
from .model_client import GenerativeModelClient
from .tools import ToolRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

SYSTEM_INSTRUCTIONS = """
You are inventory manager that can help answer questions related to the following database schema using the functions provided to you.
{
  "tables": [
    {
      "name": "products",
      "description": "Represents products.",
      "columns": [
        {"name": "product_id", "type": "int", "description": "Unique identifier for the product (primary key)."},
        {"name": "name", "type": "varchar", "description": "Name of the product."},
        {"name": "price", "type": "double", "description": "Price of the product."},
        {"name": "reorder_point", "type": "int", "description": "The stock level at which a product should be reordered."},
        {"name": "categoryId", "type": "int", "description": "Foreign key to the categories table, linking the product to its category."},
        {"name": "sku", "type": "varchar", "description": "Stock keeping unit, a unique identifier for each product."},
        {"name": "description", "type": "varchar", "description": "A brief description of the product."}
      ],
      "relations": [
        {"foreign_key": "categoryId", "references_table": "categories", "references_column": "id"}
      ]
    },
    {
      "name": "categories",
      "description": "Stores different product categories.",
      "columns": [
        {"name": "id", "type": "int", "description": "Unique identifier for the category (primary key)."},
        {"name": "category", "type": "varchar", "description": "The name of the category (e.g., 'Electronics', 'Books')."}
      ]
    },
    {
      "name": "locations",
      "description": "Represents physical storage locations.",
      "columns": [
        {"name": "id", "type": "int", "description": "Unique identifier for the location (primary key)."},
        {"name": "location", "type": "varchar", "description": "The name or identifier of the location (e.g., 'Warehouse A', 'Store 1')."}
      ]
    },
    {
      "name": "inventories",
      "description": "Tracks the quantity of products at specific locations. {locationId, productId} are unique",
      "columns": [
        {"name": "id", "type": "int", "description": "Unique identifier for the inventory record (primary key)."},
        {"name": "quantity", "type": "int", "description": "The current stock quantity of the product at the location."},
        {"name": "last_updated", "type": "timestamp", "description": "Timestamp of the last update to the inventory record."},
        {"name": "productId", "type": "int", "description": "Foreign key to the products table, linking to the specific product."},
        {"name": "locationId", "type": "int", "description": "Foreign key to the locations table, linking to the specific location."}
      ],
      "relations": [
        {"foreign_key": "productId", "references_table": "products", "references_column": "product_id"},
        {"foreign_key": "locationId", "references_table": "locations", "references_column": "id"}
      ]
    }
  ]
}
""".strip()


class Conversation(BaseModel):
    """
    Conversation aggregate - orchestrates the model/tool round trips of one exchange.

    Algebraic Composition:
    - ConversationHistory: Identity + turns (immutable)
    - ToolRegistry: Functions the model may call
    - GenerativeModelClient: One model exchange per call

    Business Logic:
    - send_message(): Add user text -> loop model/tools -> append final answer
    - Returns new Conversation (immutable updates)
    """

    history: ConversationHistory
    tools: ToolRegistry
    client: GenerativeModelClient
    max_round_trips: int = Field(default=10, ge=1)
    round_trip_timeout: float | None = None
    instructions: str = SYSTEM_INSTRUCTIONS

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @classmethod
    def start(
        cls,
        *,
        tools: ToolRegistry,
        client: GenerativeModelClient,
        conversation_id: str | None = None,
        **options: Any,
    ) -> Conversation:
        """Factory: Start new conversation with fresh history."""
        return cls(history=ConversationHistory(id=conversation_id), tools=tools, client=client, **options)

    @classmethod
    def resume(
        cls,
        history: ConversationHistory,
        *,
        tools: ToolRegistry,
        client: GenerativeModelClient,
        **options: Any,
    ) -> Conversation:
        """Factory: Continue from a stored history."""
        return cls(history=history, tools=tools, client=client, **options)

    @property
    def reply(self) -> str | None:
        """Text of the last model answer, if the history ends with one."""
        last = self.history.last_turn
        return last.text if isinstance(last, ModelText) else None

    async def send_message(self, text: str) -> Conversation:
        """Run one exchange and return the conversation extended by its turns.

        Raises:
            UnknownTool: The model asked for an unregistered function
            ToolCallLoopExceeded: Still requesting tools after max_round_trips model calls
            NoAnswerProduced: Final response carried no text
            RoundTripTimeout: A model call or tool invocation ran out of time
            InvalidToolArguments: The model's arguments failed the tool's argument model

        Any other error raised by a tool propagates as is. On error the original instance is untouched.
        """
        history = self.history.append(UserText(text=text))
        definitions = self.tools.tool_definitions()

        for round_trip in range(1, self.max_round_trips + 1):
            response = await self._bounded(
                "Model call",
                self.client.generate(history.messages, definitions, self.instructions),
            )

            calls = [part for part in response.parts if isinstance(part, ToolCallPart)]
            if not calls:
                answer = next((part.content for part in response.parts if isinstance(part, TextPart)), "")
                if not answer:
                    raise NoAnswerProduced("Model returned neither a tool call nor text")
                logger.info("Conversation %s answered after %d round trips", history.id, round_trip)
                return self.model_copy(update={"history": history.append(ModelText(text=answer))})

            call = calls[0]
            if round_trip == self.max_round_trips:
                logger.warning(
                    "Conversation %s: not dispatching %s past the round-trip bound", history.id, call.tool_name
                )
                break
            if len(calls) > 1:
                logger.warning("Ignoring %d extra tool calls from model", len(calls) - 1)
            arguments = call.args_as_dict()
            logger.info("Round trip %d: calling %s(%s)", round_trip, call.tool_name, arguments)

            result = await self._bounded(f"Tool {call.tool_name}", self.tools.invoke(call.tool_name, arguments))
            history = history.append(
                ModelToolCall(tool_name=call.tool_name, arguments=arguments, call_id=call.tool_call_id),
                ToolResult(tool_name=call.tool_name, result=to_jsonable_python(result), call_id=call.tool_call_id),
            )

        raise ToolCallLoopExceeded(self.max_round_trips)

    async def _bounded(self, stage: str, awaitable: Awaitable[T]) -> T:
        if self.round_trip_timeout is None:
            return await awaitable
        try:
            async with asyncio.timeout(self.round_trip_timeout):
                return await awaitable
        except TimeoutError as exc:
            raise RoundTripTimeout(stage, self.round_trip_timeout) from exc


__all__ = ["SYSTEM_INSTRUCTIONS", "Conversation"]
