"""Stockroom package exports."""

from .config import Settings, settings
from .domain import Conversation
from .service import ChatbotService

__all__ = [
    "ChatbotService",
    "Conversation",
    "Settings",
    "settings",
]
