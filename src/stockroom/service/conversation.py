"""Thin orchestration service - load history, delegate to the aggregate, save."""

from __future__ import annotations

import asyncio
import logging
import weakref
from contextlib import AbstractAsyncContextManager, nullcontext

from ..domain.conversation import Conversation
from ..domain.model_client import GenerativeModelClient
from ..domain.tools import ToolRegistry
from .storage import ConversationStore

logger = logging.getLogger(__name__)


class ChatbotService:
    """
    Pure infrastructure orchestrator - zero business logic.

    Service responsibilities:
    1. Resolve stored history for a conversation id (empty when unknown)
    2. Delegate the exchange to the Conversation aggregate
    3. Persist the extended history, only when an id was given and the exchange succeeded
    4. Serialize exchanges that share a conversation id

    Domain aggregate owns ALL loop logic.
    """

    def __init__(
        self,
        tools: ToolRegistry,
        client: GenerativeModelClient,
        store: ConversationStore,
        *,
        max_round_trips: int = 10,
        round_trip_timeout: float | None = None,
    ):
        self.tools = tools
        self.client = client
        self.store = store
        self.max_round_trips = max_round_trips
        self.round_trip_timeout = round_trip_timeout
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = weakref.WeakValueDictionary()

    def _lock_for(self, conversation_id: str | None) -> AbstractAsyncContextManager[object]:
        if not conversation_id:
            return nullcontext()
        lock = self._locks.get(conversation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[conversation_id] = lock
        return lock

    async def process_message(self, text: str, conversation_id: str | None = None) -> str:
        """
        Run one exchange and return the model's final text.

        An empty conversation_id counts as absent. Errors from the aggregate
        propagate unchanged and leave the store as it was.
        """
        options = {"max_round_trips": self.max_round_trips, "round_trip_timeout": self.round_trip_timeout}
        conversation_id = conversation_id or None

        async with self._lock_for(conversation_id):
            history = await self.store.get(conversation_id) if conversation_id is not None else None
            if history is None:
                conversation = Conversation.start(
                    tools=self.tools, client=self.client, conversation_id=conversation_id, **options
                )
            else:
                conversation = Conversation.resume(history, tools=self.tools, client=self.client, **options)

            updated = await conversation.send_message(text)

            if conversation_id is not None:
                await self.store.set(conversation_id, updated.history)
                logger.info("Saved conversation %s (%d turns)", conversation_id, len(updated.history.turns))

        return updated.reply or ""


def create_chatbot_service(
    tools: ToolRegistry,
    client: GenerativeModelClient,
    store: ConversationStore,
    *,
    max_round_trips: int = 10,
    round_trip_timeout: float | None = None,
) -> ChatbotService:
    """
    Factory function for creating ChatbotService.

    Service owns its own construction logic - deps.py just calls this.
    """
    return ChatbotService(
        tools,
        client,
        store,
        max_round_trips=max_round_trips,
        round_trip_timeout=round_trip_timeout,
    )


__all__ = ["ChatbotService", "create_chatbot_service"]
