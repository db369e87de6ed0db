"""Domain Tools - LLM-Callable Functions over the Inventory Services.

Each tool is one ToolSpec record holding its name, the description the LLM
reads, an optional pydantic argument model and the async handler. Because the
advertised schema and the implementation live in the same record, every
schema the registry lists is invocable and every invocable name is listed.

Tool Registration:
    >>> registry = build_tool_registry(categories, locations, products, inventory)
    >>> await registry.invoke("getAllCategories", {})

Argument Handling:
    Arguments arrive as the JSON object the model produced. When a tool has an
    argument model, the registry validates against it before calling the
    handler and reports a rejection as InvalidToolArguments. Errors raised by
    the handler itself, validation errors included, propagate unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic_ai.tools import ToolDefinition

from .domain_type import ToolGroup
from .errors import Conflict, InvalidToolArguments, UnknownTool
from .schemas import (
    CategoryCreate,
    EntityId,
    InventoryCreate,
    InventoryUpdateArgs,
    LocationCreate,
    ProductCreate,
    ProductUpdateArgs,
)

if TYPE_CHECKING:
    from ..service.catalog import CategoryService, LocationService
    from ..service.inventory import InventoryService
    from ..service.products import ProductService

logger = logging.getLogger(__name__)

_NO_PARAMETERS: dict[str, Any] = {"type": "object", "properties": {}}


class ToolSchema(BaseModel):
    """Machine-readable description of one tool, as advertised to the model."""

    name: str
    description: str
    group: ToolGroup
    parameters: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)


class ToolSpec(BaseModel):
    """A named, schema-described function with its implementation."""

    name: str
    description: str
    group: ToolGroup
    args_model: type[BaseModel] | None = None
    handler: Callable[..., Awaitable[Any]]

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def parameters(self) -> dict[str, Any] | None:
        if self.args_model is None:
            return None
        return self.args_model.model_json_schema(by_alias=True)

    def as_schema(self) -> ToolSchema:
        return ToolSchema(
            name=self.name, description=self.description, group=self.group, parameters=self.parameters
        )

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters_json_schema=self.parameters or _NO_PARAMETERS,
        )

    async def __call__(self, args: Mapping[str, Any]) -> Any:
        if self.args_model is None:
            return await self.handler()
        try:
            validated = self.args_model.model_validate(dict(args))
        except ValidationError as exc:
            raise InvalidToolArguments(
                self.name, exc.errors(include_url=False, include_context=False, include_input=False)
            ) from exc
        return await self.handler(validated)


class ToolRegistry:
    """Name -> tool dispatch. Stateless apart from the registered specs."""

    def __init__(self, tools: Iterable[ToolSpec] = ()) -> None:
        self._tools: dict[str, ToolSpec] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: ToolSpec) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def names(self) -> tuple[str, ...]:
        return tuple(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def list_tool_schemas(self, group: ToolGroup | None = None) -> list[ToolSchema]:
        """Advertised schemas, optionally only those of one entity group."""
        return [tool.as_schema() for tool in self._tools.values() if group is None or tool.group is group]

    def tool_definitions(self) -> list[ToolDefinition]:
        """Tool definitions in Pydantic AI format, for a model request."""
        return [tool.definition() for tool in self._tools.values()]

    async def invoke(self, name: str, args: Mapping[str, Any] | None = None) -> Any:
        """Dispatch a call; UnknownTool for unregistered names, anything else propagates."""
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownTool(name)
        logger.debug("Invoking tool %s with %s", name, args)
        return await tool(args or {})


# ---------------------------------------------------------------------------
# Inventory tool groups
# ---------------------------------------------------------------------------


def category_tools(categories: CategoryService) -> list[ToolSpec]:
    async def add_category(args: CategoryCreate) -> bool:
        try:
            await categories.create(args)
        except Conflict:
            return False
        return True

    async def remove_category(args: EntityId) -> bool:
        if await categories.products_in(args.id):
            return False
        await categories.remove(args.id)
        return True

    async def products_by_category(args: EntityId) -> Any:
        return await categories.products_in(args.id)

    group = ToolGroup.CATEGORIES
    return [
        ToolSpec(
            name="getAllCategories",
            description="Gets the available categories names along with their IDs that are stored in the categories table",
            group=group,
            handler=categories.list_all,
        ),
        ToolSpec(
            name="getProductsByCategoryId",
            description=(
                "Returns the products (id, name, sku, description, price and reorder_point) of a category, "
                "or fails with not found when the category id does not exist"
            ),
            group=group,
            args_model=EntityId,
            handler=products_by_category,
        ),
        ToolSpec(
            name="addCategory",
            description=(
                "Inserts a new category into the categories table. "
                "Returns true if it was inserted and false if it already exists"
            ),
            group=group,
            args_model=CategoryCreate,
            handler=add_category,
        ),
        ToolSpec(
            name="removeCategory",
            description=(
                "Removes a category by id; use getAllCategories to find the id of a named category. "
                "Returns true if removed and false if it cannot be removed because products depend on it"
            ),
            group=group,
            args_model=EntityId,
            handler=remove_category,
        ),
    ]


def location_tools(locations: LocationService) -> list[ToolSpec]:
    async def add_location(args: LocationCreate) -> Any:
        try:
            return await locations.create(args)
        except Conflict:
            return False

    async def remove_location(args: EntityId) -> bool:
        if not await locations.exists(args.id) or await locations.has_inventory(args.id):
            return False
        await locations.remove(args.id)
        return True

    group = ToolGroup.LOCATIONS
    return [
        ToolSpec(
            name="getAllLocations",
            description="Gets the available locations names along with their IDs that are stored in the locations table",
            group=group,
            handler=locations.list_all,
        ),
        ToolSpec(
            name="addLocation",
            description=(
                "Inserts a new location into the locations table. "
                "Returns the location object if it was inserted and false if it already exists"
            ),
            group=group,
            args_model=LocationCreate,
            handler=add_location,
        ),
        ToolSpec(
            name="removeLocation",
            description=(
                "Removes a location by id; use getAllLocations to find the id of a named location. "
                "Returns true if removed and false if it does not exist or inventory items depend on it"
            ),
            group=group,
            args_model=EntityId,
            handler=remove_location,
        ),
    ]


def product_tools(products: ProductService) -> list[ToolSpec]:
    async def get_product(args: EntityId) -> Any:
        return await products.get(args.id)

    async def create_product(args: ProductCreate) -> Any:
        return await products.create(args)

    async def update_product(args: ProductUpdateArgs) -> Any:
        return await products.update(args.id, args)

    async def remove_product(args: EntityId) -> bool:
        await products.remove(args.id)
        return True

    group = ToolGroup.PRODUCTS
    return [
        ToolSpec(
            name="getAllProducts",
            description="Gets all products from the database with basic information (id, name, sku, price, description, reorder_point)",
            group=group,
            handler=products.list_all,
        ),
        ToolSpec(
            name="getProductById",
            description="Gets detailed information about a specific product by its ID, including category and inventory information",
            group=group,
            args_model=EntityId,
            handler=get_product,
        ),
        ToolSpec(
            name="createProduct",
            description="Creates a new product with the specified details. Returns the created product with complete details",
            group=group,
            args_model=ProductCreate,
            handler=create_product,
        ),
        ToolSpec(
            name="updateProduct",
            description="Updates an existing product. All fields are optional except the product ID. Returns the updated product",
            group=group,
            args_model=ProductUpdateArgs,
            handler=update_product,
        ),
        ToolSpec(
            name="removeProduct",
            description=(
                "Removes a product by ID. Automatically removes all inventory entries for this product. "
                "Returns true if successful"
            ),
            group=group,
            args_model=EntityId,
            handler=remove_product,
        ),
    ]


def inventory_tools(inventory: InventoryService) -> list[ToolSpec]:
    async def get_inventory(args: EntityId) -> Any:
        return await inventory.get(args.id)

    async def create_inventory(args: InventoryCreate) -> Any:
        return await inventory.create(args)

    async def update_inventory(args: InventoryUpdateArgs) -> Any:
        return await inventory.update(args.id, args)

    async def remove_inventory(args: EntityId) -> bool:
        await inventory.remove(args.id)
        return True

    group = ToolGroup.INVENTORY
    return [
        ToolSpec(
            name="getAllInventories",
            description="Gets all inventory records from the database with product and location information",
            group=group,
            handler=inventory.list_all,
        ),
        ToolSpec(
            name="getInventoryById",
            description=(
                "Gets detailed information about a specific inventory record by its ID, "
                "including product and location details"
            ),
            group=group,
            args_model=EntityId,
            handler=get_inventory,
        ),
        ToolSpec(
            name="createInventory",
            description=(
                "Creates a new inventory record with the specified details. "
                "Returns the created inventory record with complete details"
            ),
            group=group,
            args_model=InventoryCreate,
            handler=create_inventory,
        ),
        ToolSpec(
            name="updateInventory",
            description=(
                "Updates an existing inventory record. All fields are optional except the inventory ID. "
                "Returns the updated inventory record"
            ),
            group=group,
            args_model=InventoryUpdateArgs,
            handler=update_inventory,
        ),
        ToolSpec(
            name="removeInventory",
            description="Removes an inventory record by ID. Returns true if successful",
            group=group,
            args_model=EntityId,
            handler=remove_inventory,
        ),
    ]


def build_tool_registry(
    categories: CategoryService,
    locations: LocationService,
    products: ProductService,
    inventory: InventoryService,
) -> ToolRegistry:
    """Registry with every inventory tool group."""
    return ToolRegistry(
        [
            *category_tools(categories),
            *location_tools(locations),
            *product_tools(products),
            *inventory_tools(inventory),
        ]
    )


__all__ = [
    "ToolRegistry",
    "ToolSchema",
    "ToolSpec",
    "build_tool_registry",
    "category_tools",
    "inventory_tools",
    "location_tools",
    "product_tools",
]
