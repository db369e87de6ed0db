"""Domain Type System - Core Enumerations.

Defines type-safe constants using Python's StrEnum for domain concepts.
Using StrEnum instead of plain Enum provides automatic string coercion
and better JSON serialization without custom encoders.
"""

from enum import StrEnum


class TurnRole(StrEnum):
    """Who a turn is attributed to when history is replayed to the model.

    Note:
        Tool results are attributed to USER. That is the wire convention of
        function-calling APIs (results travel in the next request), not a
        claim that the user produced them.
    """

    USER = "user"
    MODEL = "model"


class ToolGroup(StrEnum):
    """Entity a tool operates on. One group per CRUD service."""

    CATEGORIES = "categories"
    LOCATIONS = "locations"
    PRODUCTS = "products"
    INVENTORY = "inventory"


class ConversationBackend(StrEnum):
    """Where conversation history lives between exchanges."""

    MEMORY = "memory"
    REDIS = "redis"


__all__ = ["ConversationBackend", "ToolGroup", "TurnRole"]
