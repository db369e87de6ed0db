"""Service layer - persistence and thin orchestration around the domain."""

from .catalog import CategoryService, LocationService
from .conversation import ChatbotService, create_chatbot_service
from .database import Database
from .inventory import InventoryService
from .products import ProductService
from .storage import (
    ConversationStore,
    InMemoryConversationStore,
    RedisConversationStore,
    RedisStoreConfig,
    create_conversation_store,
)

__all__ = [
    "CategoryService",
    "ChatbotService",
    "ConversationStore",
    "Database",
    "InMemoryConversationStore",
    "InventoryService",
    "LocationService",
    "ProductService",
    "RedisConversationStore",
    "RedisStoreConfig",
    "create_chatbot_service",
    "create_conversation_store",
]
