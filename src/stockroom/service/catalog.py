"""Category and location CRUD services.

Names are stored lower-cased so that 'Electronics' and 'electronics' are the
same category. Uniqueness is checked up front for a readable Conflict and
backed by the unique index for concurrent inserts.
"""

from __future__ import annotations

import logging

from sqlalchemy import delete, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.errors import Conflict
from ..domain.schemas import (
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
    LocationCreate,
    LocationRead,
    LocationUpdate,
    ProductRead,
)
from .database import Database, require
from .orm import Category, Inventory, Location, Product

logger = logging.getLogger(__name__)


def _normalize(name: str) -> str:
    return name.strip().lower()


class CategoryService:
    """CRUD over the categories table."""

    def __init__(self, db: Database):
        self.db = db

    async def list_all(self) -> list[CategoryRead]:
        async with self.db.session() as session:
            rows = await session.scalars(select(Category).order_by(Category.id))
            return [CategoryRead.model_validate(row) for row in rows]

    async def get(self, category_id: int) -> CategoryRead:
        async with self.db.session() as session:
            return CategoryRead.model_validate(await require(session, Category, category_id, "Category"))

    async def create(self, data: CategoryCreate) -> CategoryRead:
        name = _normalize(data.category)
        async with self.db.transaction() as session:
            await self._ensure_unique(session, name)
            category = Category(category=name)
            session.add(category)
            try:
                await session.flush()
            except IntegrityError as exc:
                raise Conflict("Category already exists") from exc
            logger.info("Created category %d (%s)", category.id, name)
            return CategoryRead.model_validate(category)

    async def update(self, category_id: int, data: CategoryUpdate) -> CategoryRead:
        async with self.db.transaction() as session:
            category = await require(session, Category, category_id, "Category")
            if data.category is not None:
                name = _normalize(data.category)
                if name != category.category:
                    await self._ensure_unique(session, name)
                    category.category = name
            await session.flush()
            return CategoryRead.model_validate(category)

    async def remove(self, category_id: int) -> None:
        async with self.db.transaction() as session:
            await require(session, Category, category_id, "Category")
            if await self._has_products(session, category_id):
                raise Conflict(f"Category with ID {category_id} still has products")
            await session.execute(delete(Category).where(Category.id == category_id))
        logger.info("Removed category %d", category_id)

    async def products_in(self, category_id: int) -> list[ProductRead]:
        """Products of a category; NotFound when the category does not exist."""
        async with self.db.session() as session:
            await require(session, Category, category_id, "Category")
            rows = await session.scalars(
                select(Product).where(Product.category_id == category_id).order_by(Product.id)
            )
            return [ProductRead.model_validate(row) for row in rows]

    async def has_products(self, category_id: int) -> bool:
        async with self.db.session() as session:
            return await self._has_products(session, category_id)

    @staticmethod
    async def _has_products(session: AsyncSession, category_id: int) -> bool:
        return bool(await session.scalar(select(exists().where(Product.category_id == category_id))))

    @staticmethod
    async def _ensure_unique(session: AsyncSession, name: str) -> None:
        if await session.scalar(select(Category.id).where(Category.category == name)) is not None:
            raise Conflict("Category already exists")


class LocationService:
    """CRUD over the locations table."""

    def __init__(self, db: Database):
        self.db = db

    async def list_all(self) -> list[LocationRead]:
        async with self.db.session() as session:
            rows = await session.scalars(select(Location).order_by(Location.id))
            return [LocationRead.model_validate(row) for row in rows]

    async def get(self, location_id: int) -> LocationRead:
        async with self.db.session() as session:
            return LocationRead.model_validate(await require(session, Location, location_id, "Location"))

    async def exists(self, location_id: int) -> bool:
        async with self.db.session() as session:
            return await session.get(Location, location_id) is not None

    async def create(self, data: LocationCreate) -> LocationRead:
        name = _normalize(data.location)
        async with self.db.transaction() as session:
            await self._ensure_unique(session, name)
            location = Location(location=name)
            session.add(location)
            try:
                await session.flush()
            except IntegrityError as exc:
                raise Conflict("Location already exists") from exc
            logger.info("Created location %d (%s)", location.id, name)
            return LocationRead.model_validate(location)

    async def update(self, location_id: int, data: LocationUpdate) -> LocationRead:
        async with self.db.transaction() as session:
            location = await require(session, Location, location_id, "Location")
            if data.location is not None:
                name = _normalize(data.location)
                if name != location.location:
                    await self._ensure_unique(session, name)
                    location.location = name
            await session.flush()
            return LocationRead.model_validate(location)

    async def remove(self, location_id: int) -> None:
        async with self.db.transaction() as session:
            await require(session, Location, location_id, "Location")
            if await self._has_inventory(session, location_id):
                raise Conflict(f"Location with ID {location_id} still holds inventory")
            await session.execute(delete(Location).where(Location.id == location_id))
        logger.info("Removed location %d", location_id)

    async def has_inventory(self, location_id: int) -> bool:
        async with self.db.session() as session:
            return await self._has_inventory(session, location_id)

    @staticmethod
    async def _has_inventory(session: AsyncSession, location_id: int) -> bool:
        return bool(await session.scalar(select(exists().where(Inventory.location_id == location_id))))

    @staticmethod
    async def _ensure_unique(session: AsyncSession, name: str) -> None:
        if await session.scalar(select(Location.id).where(Location.location == name)) is not None:
            raise Conflict("Location already exists")


__all__ = ["CategoryService", "LocationService"]
