"""Category CRUD router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from ...domain.schemas import CategoryCreate, CategoryRead, CategoryUpdate, ProductRead
from ...service import CategoryService
from ..deps import get_category_service

router = APIRouter(prefix="/categories", tags=["categories"])

Service = Annotated[CategoryService, Depends(get_category_service)]


@router.get("/", response_model=list[CategoryRead])
async def list_categories(service: Service) -> list[CategoryRead]:
    return await service.list_all()


@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(category_id: int, service: Service) -> CategoryRead:
    return await service.get(category_id)


@router.get("/{category_id}/products", response_model=list[ProductRead])
async def list_category_products(category_id: int, service: Service) -> list[ProductRead]:
    """Products of one category; 404 when the category does not exist."""
    return await service.products_in(category_id)


@router.post("/", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(body: CategoryCreate, service: Service) -> CategoryRead:
    return await service.create(body)


@router.patch("/{category_id}", response_model=CategoryRead)
async def update_category(category_id: int, body: CategoryUpdate, service: Service) -> CategoryRead:
    return await service.update(category_id, body)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_category(category_id: int, service: Service) -> Response:
    """Remove a category; 409 while products still reference it."""
    await service.remove(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
