"""Product CRUD router. Product bodies may carry per-location stock levels."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from ...domain.schemas import ProductCreate, ProductDetail, ProductRead, ProductUpdate
from ...service import ProductService
from ..deps import get_product_service

router = APIRouter(prefix="/products", tags=["products"])

Service = Annotated[ProductService, Depends(get_product_service)]


@router.get("/", response_model=list[ProductRead])
async def list_products(service: Service) -> list[ProductRead]:
    return await service.list_all()


@router.get("/{product_id}", response_model=ProductDetail)
async def get_product(product_id: int, service: Service) -> ProductDetail:
    return await service.get(product_id)


@router.post("/", response_model=ProductDetail, status_code=status.HTTP_201_CREATED)
async def create_product(body: ProductCreate, service: Service) -> ProductDetail:
    return await service.create(body)


@router.patch("/{product_id}", response_model=ProductDetail)
async def update_product(product_id: int, body: ProductUpdate, service: Service) -> ProductDetail:
    return await service.update(product_id, body)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_product(product_id: int, service: Service) -> Response:
    """Remove a product together with its stock rows."""
    await service.remove(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
