"""Location CRUD router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from ...domain.schemas import LocationCreate, LocationRead, LocationUpdate
from ...service import LocationService
from ..deps import get_location_service

router = APIRouter(prefix="/locations", tags=["locations"])

Service = Annotated[LocationService, Depends(get_location_service)]


@router.get("/", response_model=list[LocationRead])
async def list_locations(service: Service) -> list[LocationRead]:
    return await service.list_all()


@router.get("/{location_id}", response_model=LocationRead)
async def get_location(location_id: int, service: Service) -> LocationRead:
    return await service.get(location_id)


@router.post("/", response_model=LocationRead, status_code=status.HTTP_201_CREATED)
async def create_location(body: LocationCreate, service: Service) -> LocationRead:
    return await service.create(body)


@router.patch("/{location_id}", response_model=LocationRead)
async def update_location(location_id: int, body: LocationUpdate, service: Service) -> LocationRead:
    return await service.update(location_id, body)


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_location(location_id: int, service: Service) -> Response:
    """Remove a location; 409 while inventory is still held there."""
    await service.remove(location_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
