"""Inventory (stock record) CRUD router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from ...domain.schemas import InventoryCreate, InventoryRead, InventoryUpdate
from ...service import InventoryService
from ..deps import get_inventory_service

router = APIRouter(prefix="/inventory", tags=["inventory"])

Service = Annotated[InventoryService, Depends(get_inventory_service)]


@router.get("/", response_model=list[InventoryRead])
async def list_inventory(service: Service) -> list[InventoryRead]:
    return await service.list_all()


@router.get("/{inventory_id}", response_model=InventoryRead)
async def get_inventory(inventory_id: int, service: Service) -> InventoryRead:
    return await service.get(inventory_id)


@router.post("/", response_model=InventoryRead, status_code=status.HTTP_201_CREATED)
async def create_inventory(body: InventoryCreate, service: Service) -> InventoryRead:
    return await service.create(body)


@router.patch("/{inventory_id}", response_model=InventoryRead)
async def update_inventory(inventory_id: int, body: InventoryUpdate, service: Service) -> InventoryRead:
    return await service.update(inventory_id, body)


@router.delete("/{inventory_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_inventory(inventory_id: int, service: Service) -> Response:
    await service.remove(inventory_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
