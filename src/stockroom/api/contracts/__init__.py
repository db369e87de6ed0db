from .chatbot import SendMessageRequest, SendMessageResponse
from .health import HealthResponse

__all__ = [
    "HealthResponse",
    "SendMessageRequest",
    "SendMessageResponse",
]
