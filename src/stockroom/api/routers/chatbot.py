"""Chatbot API Router - thin HTTP layer over the chatbot service."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ...domain.domain_type import ToolGroup
from ...domain.tools import ToolRegistry, ToolSchema
from ...service import ChatbotService
from ..contracts import SendMessageRequest, SendMessageResponse
from ..deps import get_chatbot_service, get_tool_registry

router = APIRouter(prefix="/chatbot", tags=["chatbot"])


@router.post("/message", response_model=SendMessageResponse)
async def send_message(
    request: SendMessageRequest,
    service: Annotated[ChatbotService, Depends(get_chatbot_service)],
) -> SendMessageResponse:
    """
    Send a message and get the assistant's answer.

    With a conversationId the exchange continues (and extends) the stored
    history; without one it is a one-off exchange that is not stored.
    Domain errors are mapped to status codes by the app's exception handlers.
    """
    reply = await service.process_message(request.message, request.conversation_id)
    return SendMessageResponse(data=reply)


@router.get("/tools", response_model=list[ToolSchema])
async def list_tools(
    registry: Annotated[ToolRegistry, Depends(get_tool_registry)],
    group: ToolGroup | None = None,
) -> list[ToolSchema]:
    """List the functions the assistant can call, with their argument schemas.

    Pass ?group=categories|locations|products|inventory to list one entity's tools.
    """
    return registry.list_tool_schemas(group)
