"""SQLAlchemy ORM models for the four inventory tables."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Single declarative base for all tables."""

    pass


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    category: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)


class Location(Base):
    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    location: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column("product_id", Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sku: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000))
    price: Mapped[float] = mapped_column(Float, nullable=False)
    reorder_point: Mapped[int] = mapped_column(Integer, nullable=False)
    category_id: Mapped[int] = mapped_column("categoryId", ForeignKey("categories.id"), nullable=False)

    # Relationships
    category: Mapped[Category] = relationship()
    inventories: Mapped[list["Inventory"]] = relationship(back_populates="product")


class Inventory(Base):
    __tablename__ = "inventories"
    __table_args__ = (UniqueConstraint("productId", "locationId", name="uq_inventory_product_location"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    product_id: Mapped[int] = mapped_column("productId", ForeignKey("products.product_id"), nullable=False)
    location_id: Mapped[int] = mapped_column("locationId", ForeignKey("locations.id"), nullable=False)

    # Relationships
    product: Mapped[Product] = relationship(back_populates="inventories")
    location: Mapped[Location] = relationship()


__all__ = ["Base", "Category", "Inventory", "Location", "Product"]
