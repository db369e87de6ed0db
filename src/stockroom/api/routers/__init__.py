"""API router exports"""

from .categories import router as categories_router
from .chatbot import router as chatbot_router
from .health import router as health_router
from .inventory import router as inventory_router
from .locations import router as locations_router
from .products import router as products_router

__all__ = [
    "categories_router",
    "chatbot_router",
    "health_router",
    "inventory_router",
    "locations_router",
    "products_router",
]
