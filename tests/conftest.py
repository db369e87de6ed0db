"""
Shared test fixtures and configuration.

Environment strategy:
- All tests load .env.test (SQLite via aiosqlite, in-memory conversation store)
- No model provider is contacted: the chat loop is driven by ScriptedModel
- Every test that touches the database gets its own file under tmp_path
"""

from pathlib import Path

import pytest
import pytest_asyncio
from dotenv import load_dotenv

load_dotenv(Path(__file__).parent.parent / ".env.test", override=True)

from stockroom.domain.schemas import CategoryCreate, LocationCreate, ProductCreate, StockLevel
from stockroom.domain.tools import ToolRegistry, build_tool_registry
from stockroom.service import (
    CategoryService,
    Database,
    InMemoryConversationStore,
    InventoryService,
    LocationService,
    ProductService,
)


@pytest_asyncio.fixture
async def database(tmp_path: Path):
    """Fresh SQLite database with the full schema."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'stockroom.db'}")
    await db.create_schema()
    yield db
    await db.disconnect()


@pytest.fixture
def categories(database: Database) -> CategoryService:
    return CategoryService(database)


@pytest.fixture
def locations(database: Database) -> LocationService:
    return LocationService(database)


@pytest.fixture
def products(database: Database) -> ProductService:
    return ProductService(database)


@pytest.fixture
def inventory(database: Database) -> InventoryService:
    return InventoryService(database)


@pytest.fixture
def registry(
    categories: CategoryService,
    locations: LocationService,
    products: ProductService,
    inventory: InventoryService,
) -> ToolRegistry:
    return build_tool_registry(categories, locations, products, inventory)


@pytest.fixture
def store() -> InMemoryConversationStore:
    return InMemoryConversationStore(max_entries=10)


@pytest_asyncio.fixture
async def catalog(categories: CategoryService, locations: LocationService, products: ProductService) -> dict[str, int]:
    """
    Small seeded catalog: one category, two locations, one product stocked at the first.

    Returns the ids by role so tests don't depend on autoincrement order.
    """
    electronics = await categories.create(CategoryCreate(category="Electronics"))
    warehouse = await locations.create(LocationCreate(location="Warehouse A"))
    store_front = await locations.create(LocationCreate(location="Store 1"))
    laptop = await products.create(
        ProductCreate(
            name="Laptop",
            sku="LAP-001",
            description="14 inch",
            price=999.99,
            reorder_point=5,
            category_id=electronics.id,
            inventories=[StockLevel(location_id=warehouse.id, quantity=12)],
        )
    )
    return {
        "category": electronics.id,
        "warehouse": warehouse.id,
        "store": store_front.id,
        "product": laptop.id,
        "stock": laptop.inventories[0].id,
    }
