"""Chatbot API contracts - wire names match the web client (conversationId, data)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SendMessageRequest(BaseModel):
    """Request to send a message to the inventory assistant."""

    message: str = Field(
        min_length=1,
        max_length=10_000,
        description="User message to send",
        examples=["Which categories do we have?"],
    )
    conversation_id: str | None = Field(
        default=None,
        alias="conversationId",
        description="Conversation key to continue; omit for a one-off exchange that is not stored",
        examples=["d1c9a6f2-warehouse-chat"],
    )

    model_config = ConfigDict(populate_by_name=True)


class SendMessageResponse(BaseModel):
    """Final answer of the assistant."""

    data: str = Field(description="Model's final text reply")
