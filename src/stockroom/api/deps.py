"""API dependency wiring - cached singletons built from settings."""

from functools import lru_cache

from ..config import settings
from ..domain.model_client import GenerativeModelClient
from ..domain.tools import ToolRegistry, build_tool_registry
from ..service import (
    CategoryService,
    ChatbotService,
    ConversationStore,
    Database,
    InventoryService,
    LocationService,
    ProductService,
    RedisStoreConfig,
    create_chatbot_service,
    create_conversation_store,
)


@lru_cache(maxsize=1)
def get_database() -> Database:
    """Create the async engine from config (cached singleton)."""
    pooled = not settings.database_url.startswith("sqlite")
    return Database(
        settings.database_url,
        pool_size=settings.db_pool_size if pooled else None,
        max_overflow=settings.db_max_overflow if pooled else None,
        echo=settings.db_echo,
    )


@lru_cache(maxsize=1)
def get_category_service() -> CategoryService:
    return CategoryService(get_database())


@lru_cache(maxsize=1)
def get_location_service() -> LocationService:
    return LocationService(get_database())


@lru_cache(maxsize=1)
def get_product_service() -> ProductService:
    return ProductService(get_database())


@lru_cache(maxsize=1)
def get_inventory_service() -> InventoryService:
    return InventoryService(get_database())


@lru_cache(maxsize=1)
def get_tool_registry() -> ToolRegistry:
    """Registry over the same service singletons the CRUD routers use."""
    return build_tool_registry(
        get_category_service(),
        get_location_service(),
        get_product_service(),
        get_inventory_service(),
    )


@lru_cache(maxsize=1)
def get_model_client() -> GenerativeModelClient:
    return GenerativeModelClient(settings.llm_model)


@lru_cache(maxsize=1)
def get_conversation_store() -> ConversationStore:
    """Create conversation store from config (cached singleton)."""
    return create_conversation_store(
        settings.conversation_backend,
        max_entries=settings.conversation_max_entries,
        ttl_seconds=settings.conversation_ttl_seconds,
        redis_config=RedisStoreConfig(url=settings.redis_url),
    )


@lru_cache(maxsize=1)
def get_chatbot_service() -> ChatbotService:
    """
    Create chatbot service (cached singleton).

    Service factory handles all construction logic - deps.py is just thin DI glue.
    """
    return create_chatbot_service(
        get_tool_registry(),
        get_model_client(),
        get_conversation_store(),
        max_round_trips=settings.chat_max_round_trips,
        round_trip_timeout=settings.chat_round_trip_timeout,
    )
