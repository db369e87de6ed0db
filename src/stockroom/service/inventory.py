"""Stock record (inventory) CRUD service."""

from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..domain.errors import Conflict, NotFound
from ..domain.schemas import InventoryCreate, InventoryRead, InventoryUpdate
from .database import Database, require
from .orm import Inventory, Location, Product, utcnow

logger = logging.getLogger(__name__)

_RELATIONS = (selectinload(Inventory.product), selectinload(Inventory.location))


class InventoryService:
    """CRUD over inventories; one row per (product, location) pair."""

    def __init__(self, db: Database):
        self.db = db

    async def list_all(self) -> list[InventoryRead]:
        async with self.db.session() as session:
            rows = await session.scalars(select(Inventory).options(*_RELATIONS).order_by(Inventory.id))
            return [InventoryRead.model_validate(row) for row in rows]

    async def get(self, inventory_id: int) -> InventoryRead:
        async with self.db.session() as session:
            return await self._read(session, inventory_id)

    async def create(self, data: InventoryCreate) -> InventoryRead:
        async with self.db.transaction() as session:
            await require(session, Product, data.product_id, "Product")
            await require(session, Location, data.location_id, "Location")
            await _ensure_pair_free(session, data.product_id, data.location_id)

            row = Inventory(
                product_id=data.product_id,
                location_id=data.location_id,
                quantity=data.quantity,
                last_updated=utcnow(),
            )
            session.add(row)
            await session.flush()
            logger.info("Created inventory %d (product=%d, location=%d)", row.id, row.product_id, row.location_id)
            return await self._read(session, row.id)

    async def update(self, inventory_id: int, data: InventoryUpdate) -> InventoryRead:
        async with self.db.transaction() as session:
            row = await require(session, Inventory, inventory_id, "Inventory")

            product_id = data.product_id or row.product_id
            location_id = data.location_id or row.location_id
            if product_id != row.product_id:
                await require(session, Product, product_id, "Product")
            if location_id != row.location_id:
                await require(session, Location, location_id, "Location")
            if (product_id, location_id) != (row.product_id, row.location_id):
                await _ensure_pair_free(session, product_id, location_id, ignore_id=inventory_id)

            row.product_id = product_id
            row.location_id = location_id
            if data.quantity is not None:
                row.quantity = data.quantity
            row.last_updated = utcnow()
            await session.flush()
            return await self._read(session, inventory_id)

    async def remove(self, inventory_id: int) -> None:
        async with self.db.transaction() as session:
            await require(session, Inventory, inventory_id, "Inventory")
            await session.execute(delete(Inventory).where(Inventory.id == inventory_id))
        logger.info("Removed inventory %d", inventory_id)

    @staticmethod
    async def _read(session: AsyncSession, inventory_id: int) -> InventoryRead:
        row = await session.scalar(
            select(Inventory)
            .where(Inventory.id == inventory_id)
            .options(*_RELATIONS)
            .execution_options(populate_existing=True)
        )
        if row is None:
            raise NotFound(f"Inventory with ID {inventory_id} not found")
        return InventoryRead.model_validate(row)


async def _ensure_pair_free(
    session: AsyncSession,
    product_id: int,
    location_id: int,
    ignore_id: int | None = None,
) -> None:
    existing = await session.scalar(
        select(Inventory.id).where(Inventory.product_id == product_id, Inventory.location_id == location_id)
    )
    if existing is not None and existing != ignore_id:
        raise Conflict("Inventory for this product at this location already exists")


__all__ = ["InventoryService"]
