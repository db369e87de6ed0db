"""Product CRUD service.

A product and its stock rows are written together: create, update and remove
each run in a single transaction, so a missing location or a SKU clash leaves
no partial rows behind.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..domain.errors import Conflict, NotFound
from ..domain.schemas import ProductCreate, ProductDetail, ProductRead, ProductUpdate, StockLevel
from .database import Database, require
from .orm import Category, Inventory, Location, Product, utcnow

logger = logging.getLogger(__name__)

_DETAIL_OPTIONS = (
    selectinload(Product.category),
    selectinload(Product.inventories).selectinload(Inventory.location),
)


class ProductService:
    """CRUD over products and the stock rows they own."""

    def __init__(self, db: Database):
        self.db = db

    async def list_all(self) -> list[ProductRead]:
        async with self.db.session() as session:
            rows = await session.scalars(select(Product).order_by(Product.id))
            return [ProductRead.model_validate(row) for row in rows]

    async def get(self, product_id: int) -> ProductDetail:
        async with self.db.session() as session:
            return await self._detail(session, product_id)

    async def create(self, data: ProductCreate) -> ProductDetail:
        async with self.db.transaction() as session:
            await self._ensure_sku_free(session, data.sku)
            await require(session, Category, data.category_id, "Category")

            product = Product(
                name=data.name,
                sku=data.sku,
                description=data.description,
                price=data.price,
                reorder_point=data.reorder_point,
                category_id=data.category_id,
            )
            session.add(product)
            await session.flush()

            if data.inventories:
                await _require_locations(session, data.inventories)
                now = utcnow()
                session.add_all(
                    Inventory(
                        product_id=product.id,
                        location_id=item.location_id,
                        quantity=item.quantity,
                        last_updated=now,
                    )
                    for item in data.inventories
                )
                await session.flush()

            logger.info("Created product %d (sku=%s) with %d stock rows", product.id, product.sku, len(data.inventories or ()))
            return await self._detail(session, product.id)

    async def update(self, product_id: int, data: ProductUpdate) -> ProductDetail:
        changes = data.model_dump(exclude_unset=True, exclude_none=True, exclude={"id", "inventories"})

        async with self.db.transaction() as session:
            product = await require(session, Product, product_id, "Product")

            if "sku" in changes and changes["sku"] != product.sku:
                await self._ensure_sku_free(session, changes["sku"])
            if "category_id" in changes:
                await require(session, Category, changes["category_id"], "Category")

            for field, value in changes.items():
                setattr(product, field, value)

            if data.inventories:
                await _require_locations(session, data.inventories)
                await _upsert_stock(session, product_id, data.inventories)

            await session.flush()
            logger.info("Updated product %d (%s)", product_id, ", ".join(sorted(changes)) or "stock only")
            return await self._detail(session, product_id)

    async def remove(self, product_id: int) -> None:
        """Remove a product together with all of its stock rows."""
        async with self.db.transaction() as session:
            await require(session, Product, product_id, "Product")
            await session.execute(delete(Inventory).where(Inventory.product_id == product_id))
            await session.execute(delete(Product).where(Product.id == product_id))
        logger.info("Removed product %d", product_id)

    @staticmethod
    async def _ensure_sku_free(session: AsyncSession, sku: str) -> None:
        if await session.scalar(select(Product.id).where(Product.sku == sku)) is not None:
            raise Conflict(f"Product with SKU {sku} already exists")

    @staticmethod
    async def _detail(session: AsyncSession, product_id: int) -> ProductDetail:
        product = await session.scalar(
            select(Product)
            .where(Product.id == product_id)
            .options(*_DETAIL_OPTIONS)
            .execution_options(populate_existing=True)
        )
        if product is None:
            raise NotFound(f"Product with ID {product_id} not found")
        return ProductDetail.model_validate(product)


async def _require_locations(session: AsyncSession, items: Sequence[StockLevel]) -> None:
    """Every referenced location must exist and appear only once."""
    location_ids = [item.location_id for item in items]
    if len(set(location_ids)) != len(location_ids):
        raise Conflict("Each location may appear only once in inventories")

    found = set(await session.scalars(select(Location.id).where(Location.id.in_(location_ids))))
    missing = [location_id for location_id in location_ids if location_id not in found]
    if missing:
        raise NotFound(f"Locations with IDs {', '.join(map(str, missing))} not found")


async def _upsert_stock(session: AsyncSession, product_id: int, items: Sequence[StockLevel]) -> None:
    """Set quantities per location, creating stock rows that do not exist yet."""
    existing = {
        row.location_id: row
        for row in await session.scalars(
            select(Inventory).where(
                Inventory.product_id == product_id,
                Inventory.location_id.in_([item.location_id for item in items]),
            )
        )
    }
    now = utcnow()
    for item in items:
        row = existing.get(item.location_id)
        if row is None:
            session.add(
                Inventory(product_id=product_id, location_id=item.location_id, quantity=item.quantity, last_updated=now)
            )
        else:
            row.quantity = item.quantity
            row.last_updated = now


__all__ = ["ProductService"]
