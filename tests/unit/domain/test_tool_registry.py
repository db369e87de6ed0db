"""
Tests for the tool registry and the inventory tool catalogue.

Services are replaced with AsyncMock(spec=...) so these tests only cover
dispatch, argument validation and the return conventions of the tools.
Behaviour against a real database is covered in tests/unit/service.
"""

from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from stockroom.domain.domain_type import ToolGroup
from stockroom.domain.errors import Conflict, InvalidToolArguments, UnknownTool
from stockroom.domain.schemas import CategoryRead, ProductCreate, ProductRead
from stockroom.domain.tools import ToolRegistry, ToolSpec, build_tool_registry
from stockroom.service import CategoryService, InventoryService, LocationService, ProductService

INVENTORY_TOOLS = {
    "getAllCategories",
    "getProductsByCategoryId",
    "addCategory",
    "removeCategory",
    "getAllLocations",
    "addLocation",
    "removeLocation",
    "getAllProducts",
    "getProductById",
    "createProduct",
    "updateProduct",
    "removeProduct",
    "getAllInventories",
    "getInventoryById",
    "createInventory",
    "updateInventory",
    "removeInventory",
}


@pytest.fixture
def services() -> dict[str, AsyncMock]:
    return {
        "categories": AsyncMock(spec=CategoryService),
        "locations": AsyncMock(spec=LocationService),
        "products": AsyncMock(spec=ProductService),
        "inventory": AsyncMock(spec=InventoryService),
    }


@pytest.fixture
def mocked_registry(services: dict[str, AsyncMock]) -> ToolRegistry:
    return build_tool_registry(**services)


def _spec(name: str, handler: AsyncMock) -> ToolSpec:
    return ToolSpec(name=name, description=f"{name} tool", group=ToolGroup.CATEGORIES, handler=handler)


def test_registry_exposes_the_inventory_tool_catalogue(mocked_registry: ToolRegistry):
    assert set(mocked_registry.names()) == INVENTORY_TOOLS
    assert len(mocked_registry) == len(INVENTORY_TOOLS)


def test_listed_schemas_and_invocable_names_are_the_same_set(mocked_registry: ToolRegistry):
    """
    Demonstrates: Bidirectional consistency.

    Every advertised schema is invocable and every invocable name is advertised,
    both in our schema format and in the definitions sent to the model.
    """
    schema_names = {schema.name for schema in mocked_registry.list_tool_schemas()}
    definition_names = {definition.name for definition in mocked_registry.tool_definitions()}

    assert schema_names == set(mocked_registry.names())
    assert definition_names == set(mocked_registry.names())
    assert all(name in mocked_registry for name in schema_names)


@pytest.mark.asyncio
async def test_known_names_dispatch_to_exactly_their_implementation():
    first, second = AsyncMock(return_value="first"), AsyncMock(return_value="second")
    registry = ToolRegistry([_spec("first", first), _spec("second", second)])

    assert await registry.invoke("second", {}) == "second"

    second.assert_awaited_once_with()
    first.assert_not_awaited()


@pytest.mark.asyncio
async def test_unknown_name_raises_unknown_tool():
    registry = ToolRegistry([_spec("first", AsyncMock())])

    with pytest.raises(UnknownTool) as exc_info:
        await registry.invoke("dropAllTables", {})

    assert exc_info.value.name == "dropAllTables"
    assert str(exc_info.value) == "Unknown function call: dropAllTables"


def test_registering_duplicate_name_is_rejected():
    registry = ToolRegistry([_spec("first", AsyncMock())])

    with pytest.raises(ValueError, match="already registered"):
        registry.register(_spec("first", AsyncMock()))


@pytest.mark.asyncio
async def test_arguments_are_validated_before_dispatch(mocked_registry: ToolRegistry, services):
    with pytest.raises(InvalidToolArguments) as exc_info:
        await mocked_registry.invoke("getProductById", {"id": "not-a-number"})

    assert exc_info.value.name == "getProductById"
    assert exc_info.value.errors[0]["loc"] == ("id",)

    services["products"].get.assert_not_awaited()


@pytest.mark.asyncio
async def test_aliased_arguments_reach_the_service_as_models(mocked_registry: ToolRegistry, services):
    services["products"].create.return_value = ProductRead(
        id=7, name="Mouse", sku="MOU-1", description=None, price=19.5, reorder_point=3
    )

    result = await mocked_registry.invoke(
        "createProduct",
        {"name": "Mouse", "sku": "MOU-1", "price": 19.5, "reorder_point": 3, "categoryId": 2},
    )

    (data,), _ = services["products"].create.await_args
    assert isinstance(data, ProductCreate)
    assert data.category_id == 2
    assert result.id == 7


def test_schema_uses_wire_names_and_marks_required_fields(mocked_registry: ToolRegistry):
    schemas = {schema.name: schema for schema in mocked_registry.list_tool_schemas()}

    create_product = schemas["createProduct"].parameters
    assert create_product["type"] == "object"
    assert "categoryId" in create_product["properties"]
    assert set(create_product["required"]) == {"name", "sku", "price", "reorder_point", "categoryId"}

    update_inventory = schemas["updateInventory"].parameters
    assert update_inventory["required"] == ["id"]


def test_tools_without_arguments_advertise_an_empty_object(mocked_registry: ToolRegistry):
    schemas = {schema.name: schema for schema in mocked_registry.list_tool_schemas()}
    definitions = {definition.name: definition for definition in mocked_registry.tool_definitions()}

    assert schemas["getAllCategories"].parameters is None
    assert definitions["getAllCategories"].parameters_json_schema == {"type": "object", "properties": {}}


@pytest.mark.asyncio
async def test_add_category_reports_duplicates_as_false(mocked_registry: ToolRegistry, services):
    services["categories"].create.side_effect = Conflict("Category already exists")

    assert await mocked_registry.invoke("addCategory", {"category": "Books"}) is False


@pytest.mark.asyncio
async def test_remove_category_refuses_while_products_depend_on_it(mocked_registry: ToolRegistry, services):
    services["categories"].products_in.return_value = [
        ProductRead(id=1, name="Laptop", sku="LAP-1", price=10.0, reorder_point=1)
    ]

    assert await mocked_registry.invoke("removeCategory", {"id": 1}) is False
    services["categories"].remove.assert_not_awaited()


@pytest.mark.asyncio
async def test_remove_location_reports_missing_location_as_false(mocked_registry: ToolRegistry, services):
    services["locations"].exists.return_value = False

    assert await mocked_registry.invoke("removeLocation", {"id": 42}) is False
    services["locations"].remove.assert_not_awaited()


@pytest.mark.asyncio
async def test_validation_errors_raised_by_a_handler_are_not_argument_errors():
    async def broken_read_model() -> CategoryRead:
        return CategoryRead.model_validate({"id": "x", "category": None})

    registry = ToolRegistry([_spec("getAllCategories", broken_read_model)])

    with pytest.raises(ValidationError):
        await registry.invoke("getAllCategories", {})


def test_schemas_can_be_listed_per_group(mocked_registry: ToolRegistry):
    inventory = mocked_registry.list_tool_schemas(ToolGroup.INVENTORY)

    assert {schema.name for schema in inventory} == {
        "getAllInventories",
        "getInventoryById",
        "createInventory",
        "updateInventory",
        "removeInventory",
    }
    assert {schema.group for schema in inventory} == {ToolGroup.INVENTORY}
    assert sum(len(mocked_registry.list_tool_schemas(group)) for group in ToolGroup) == len(INVENTORY_TOOLS)
