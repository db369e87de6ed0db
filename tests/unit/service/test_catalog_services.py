"""
Tests for the CRUD services against a throwaway SQLite database.

Demonstrates:
- Uniqueness rules surface as Conflict, missing references as NotFound
- Multi-row writes are atomic (a failed product create leaves nothing behind)
- Partial updates leave omitted fields alone and apply explicit zeros
"""

import pytest

from stockroom.domain.errors import Conflict, NotFound
from stockroom.domain.schemas import (
    CategoryCreate,
    CategoryUpdate,
    InventoryCreate,
    InventoryUpdate,
    LocationCreate,
    ProductCreate,
    ProductUpdate,
    StockLevel,
)


# ---------------------------------------------------------------------------
# Categories and locations
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_category_names_are_normalized_and_unique(categories):
    created = await categories.create(CategoryCreate(category="  Electronics "))

    assert created.category == "electronics"
    with pytest.raises(Conflict):
        await categories.create(CategoryCreate(category="ELECTRONICS"))


@pytest.mark.asyncio
async def test_category_rename(categories, catalog):
    renamed = await categories.update(catalog["category"], CategoryUpdate(category="Gadgets"))

    assert renamed.category == "gadgets"
    assert (await categories.get(catalog["category"])).category == "gadgets"


@pytest.mark.asyncio
async def test_category_with_products_cannot_be_removed(categories, catalog):
    with pytest.raises(Conflict):
        await categories.remove(catalog["category"])

    assert await categories.has_products(catalog["category"])


@pytest.mark.asyncio
async def test_products_of_unknown_category_is_not_found(categories):
    with pytest.raises(NotFound, match="Category with ID 99 not found"):
        await categories.products_in(99)


@pytest.mark.asyncio
async def test_location_holding_inventory_cannot_be_removed(locations, catalog):
    with pytest.raises(Conflict):
        await locations.remove(catalog["warehouse"])

    await locations.remove(catalog["store"])
    assert not await locations.exists(catalog["store"])


@pytest.mark.asyncio
async def test_duplicate_location_conflicts(locations, catalog):
    with pytest.raises(Conflict):
        await locations.create(LocationCreate(location="warehouse a"))


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_product_detail_includes_category_and_stock(products, catalog):
    detail = await products.get(catalog["product"])

    assert detail.category.category == "electronics"
    assert [(row.location.location, row.quantity) for row in detail.inventories] == [("warehouse a", 12)]


@pytest.mark.asyncio
async def test_product_create_with_missing_location_leaves_no_rows(products, catalog):
    """
    Demonstrates: Atomic multi-row write.

    The product row is flushed before the locations are checked; the
    rollback must remove it again.
    """
    with pytest.raises(NotFound, match="Locations with IDs 404 not found"):
        await products.create(
            ProductCreate(
                name="Phone",
                sku="PHO-001",
                price=499.0,
                reorder_point=2,
                category_id=catalog["category"],
                inventories=[
                    StockLevel(location_id=catalog["warehouse"], quantity=1),
                    StockLevel(location_id=404, quantity=1),
                ],
            )
        )

    assert [product.sku for product in await products.list_all()] == ["LAP-001"]


@pytest.mark.asyncio
async def test_product_create_rejects_unknown_category_and_duplicate_sku(products, catalog):
    with pytest.raises(NotFound):
        await products.create(ProductCreate(name="X", sku="X-1", price=1.0, reorder_point=0, category_id=99))
    with pytest.raises(Conflict):
        await products.create(
            ProductCreate(name="Laptop 2", sku="LAP-001", price=1.0, reorder_point=0, category_id=catalog["category"])
        )


@pytest.mark.asyncio
async def test_product_update_upserts_stock_per_location(products, catalog):
    updated = await products.update(
        catalog["product"],
        ProductUpdate(
            inventories=[
                StockLevel(location_id=catalog["warehouse"], quantity=3),
                StockLevel(location_id=catalog["store"], quantity=8),
            ]
        ),
    )

    stock = {row.location.location: row.quantity for row in updated.inventories}
    assert stock == {"warehouse a": 3, "store 1": 8}


@pytest.mark.asyncio
async def test_product_update_leaves_omitted_fields_and_applies_zero(products, catalog):
    updated = await products.update(catalog["product"], ProductUpdate(reorder_point=0, price=0))

    assert updated.reorder_point == 0
    assert updated.price == 0
    assert updated.name == "Laptop"
    assert updated.sku == "LAP-001"


@pytest.mark.asyncio
async def test_product_remove_takes_its_stock_rows_along(products, inventory, catalog):
    await products.remove(catalog["product"])

    assert await inventory.list_all() == []
    with pytest.raises(NotFound):
        await products.get(catalog["product"])


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_second_stock_row_for_same_pair_conflicts(inventory, catalog):
    with pytest.raises(Conflict, match="already exists"):
        await inventory.create(
            InventoryCreate(product_id=catalog["product"], location_id=catalog["warehouse"], quantity=1)
        )


@pytest.mark.asyncio
async def test_inventory_create_and_move(inventory, catalog):
    created = await inventory.create(
        InventoryCreate(product_id=catalog["product"], location_id=catalog["store"], quantity=4)
    )
    assert (created.product.sku, created.location.location, created.quantity) == ("LAP-001", "store 1", 4)

    with pytest.raises(Conflict):
        await inventory.update(created.id, InventoryUpdate(location_id=catalog["warehouse"]))

    updated = await inventory.update(created.id, InventoryUpdate(quantity=0))
    assert updated.quantity == 0


@pytest.mark.asyncio
async def test_inventory_for_unknown_product_is_not_found(inventory, catalog):
    with pytest.raises(NotFound, match="Product with ID 77 not found"):
        await inventory.create(InventoryCreate(product_id=77, location_id=catalog["warehouse"], quantity=1))
