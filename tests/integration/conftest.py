"""
HTTP-level fixtures: the FastAPI app with its singletons swapped for test doubles.

The app runs in-process through httpx.ASGITransport on the test's own event
loop, so the SQLite engine from the shared fixtures can be reused directly.
"""

import httpx
import pytest
import pytest_asyncio

from stockroom.api import deps
from stockroom.main import app
from stockroom.service import ChatbotService
from tests.support import ScriptedModel, text


@pytest.fixture
def scripted_model() -> ScriptedModel:
    """Default model: answers immediately. Tests replace .responses as needed."""
    return ScriptedModel(text("hello reply"))


@pytest_asyncio.fixture
async def client(database, categories, locations, products, inventory, registry, store, scripted_model):
    chatbot = ChatbotService(registry, scripted_model.client, store, max_round_trips=3)
    app.dependency_overrides.update(
        {
            deps.get_database: lambda: database,
            deps.get_category_service: lambda: categories,
            deps.get_location_service: lambda: locations,
            deps.get_product_service: lambda: products,
            deps.get_inventory_service: lambda: inventory,
            deps.get_tool_registry: lambda: registry,
            deps.get_chatbot_service: lambda: chatbot,
        }
    )
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()
