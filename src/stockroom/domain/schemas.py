"""Inventory input and read models.

Input models double as tool argument models: the JSON schema advertised to the
LLM is generated from them and the same model validates the arguments the LLM
sends back, so the two cannot drift. Wire names match the database columns
(``categoryId``, ``locationId``, ``productId``, ``reorder_point``).

Read models are built from ORM rows (``from_attributes``) inside the session
that loaded them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _two_decimals(value: float) -> float:
    if round(value, 2) != value:
        raise ValueError("price must have at most 2 decimal places")
    return value


Price = Annotated[float, Field(ge=0), AfterValidator(_two_decimals)]


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class EntityId(BaseModel):
    """Argument model for tools that only take an id."""

    id: int = Field(gt=0, description="ID of the record")


class CategoryCreate(BaseModel):
    category: str = Field(min_length=1, description="Category name, e.g. 'Electronics'")


class CategoryUpdate(BaseModel):
    category: str | None = Field(default=None, min_length=1)


class LocationCreate(BaseModel):
    location: str = Field(min_length=1, description="Location name, e.g. 'Warehouse A'")


class LocationUpdate(BaseModel):
    location: str | None = Field(default=None, min_length=1)


class StockLevel(BaseModel):
    """Quantity of a product held at one location."""

    location_id: int = Field(gt=0, alias="locationId", description="ID of the location")
    quantity: int = Field(ge=0, description="Quantity at this location")

    model_config = ConfigDict(populate_by_name=True)


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, description="Product name")
    sku: str = Field(min_length=1, description="Stock keeping unit, a unique identifier for the product")
    description: str | None = Field(default=None, description="Product description (optional)")
    price: Price = Field(description="Product price (non-negative, at most 2 decimals)")
    reorder_point: int = Field(ge=0, description="The stock level at which the product should be reordered")
    category_id: int = Field(gt=0, alias="categoryId", description="ID of the category this product belongs to")
    inventories: list[StockLevel] | None = Field(
        default=None,
        description="Optional initial inventory quantities at different locations",
    )

    model_config = ConfigDict(populate_by_name=True)


class ProductUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, description="New product name (optional)")
    sku: str | None = Field(default=None, min_length=1, description="New SKU (optional)")
    description: str | None = Field(default=None, description="New product description (optional)")
    price: Price | None = Field(default=None, description="New product price (optional)")
    reorder_point: int | None = Field(default=None, ge=0, description="New reorder point (optional)")
    category_id: int | None = Field(default=None, gt=0, alias="categoryId", description="New category ID (optional)")
    inventories: list[StockLevel] | None = Field(
        default=None,
        description="Updated inventory quantities per location (optional)",
    )

    model_config = ConfigDict(populate_by_name=True)


class ProductUpdateArgs(ProductUpdate):
    id: int = Field(gt=0, description="ID of the product to update")


class InventoryCreate(BaseModel):
    product_id: int = Field(gt=0, alias="productId", description="ID of the product for this inventory record")
    location_id: int = Field(gt=0, alias="locationId", description="ID of the location for this inventory record")
    quantity: int = Field(ge=0, description="The quantity of the product at this location (must be non-negative)")

    model_config = ConfigDict(populate_by_name=True)


class InventoryUpdate(BaseModel):
    product_id: int | None = Field(default=None, gt=0, alias="productId", description="New product ID (optional)")
    location_id: int | None = Field(default=None, gt=0, alias="locationId", description="New location ID (optional)")
    quantity: int | None = Field(default=None, ge=0, description="New quantity (optional)")

    model_config = ConfigDict(populate_by_name=True)


class InventoryUpdateArgs(InventoryUpdate):
    id: int = Field(gt=0, description="ID of the inventory record to update")


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


class CategoryRead(BaseModel):
    id: int
    category: str

    model_config = ConfigDict(from_attributes=True, frozen=True)


class LocationRead(BaseModel):
    id: int
    location: str

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ProductRead(BaseModel):
    id: int
    name: str
    sku: str
    description: str | None = None
    price: float
    reorder_point: int

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ProductStock(BaseModel):
    """A stock row as seen from its product."""

    id: int
    quantity: int
    last_updated: datetime
    location: LocationRead

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ProductDetail(ProductRead):
    category: CategoryRead | None = None
    inventories: list[ProductStock] = []


class InventoryRead(BaseModel):
    id: int
    quantity: int
    last_updated: datetime
    product: ProductRead
    location: LocationRead

    model_config = ConfigDict(from_attributes=True, frozen=True)


__all__ = [
    "CategoryCreate",
    "CategoryRead",
    "CategoryUpdate",
    "EntityId",
    "InventoryCreate",
    "InventoryRead",
    "InventoryUpdate",
    "InventoryUpdateArgs",
    "LocationCreate",
    "LocationRead",
    "LocationUpdate",
    "ProductCreate",
    "ProductDetail",
    "ProductRead",
    "ProductStock",
    "ProductUpdate",
    "ProductUpdateArgs",
    "StockLevel",
]
