"""Inventory API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from dealership.api.dependencies import (
    get_car_filter,
    get_inventory_repository,
    require_inventory_writer,
)
from dealership.schemas.auth import MessageResponse
from dealership.schemas.car import (
    CarCreate,
    CarFilter,
    CarMutationResponse,
    CarResponse,
    CarUpdate,
)
from dealership.services.inventory import InventoryRepository

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.post(
    "", response_model=CarMutationResponse, dependencies=[Depends(require_inventory_writer)]
)
def add_car(
    car_data: CarCreate,
    inventory: Annotated[InventoryRepository, Depends(get_inventory_repository)],
):
    """Add a car to the inventory."""
    car = inventory.create(car_data)
    return CarMutationResponse(
        message="Car added successfully!", car=CarResponse.model_validate(car)
    )


@router.get("", response_model=list[CarResponse])
def get_cars(
    filters: Annotated[CarFilter, Depends(get_car_filter)],
    inventory: Annotated[InventoryRepository, Depends(get_inventory_repository)],
):
    """List cars, optionally filtered by max price, max mileage and color."""
    return inventory.list(filters)


@router.get("/{car_id}", response_model=CarResponse)
def get_car(
    car_id: int,
    inventory: Annotated[InventoryRepository, Depends(get_inventory_repository)],
):
    """Get a specific car."""
    return inventory.get(car_id)


@router.put(
    "/{car_id}",
    response_model=CarMutationResponse,
    dependencies=[Depends(require_inventory_writer)],
)
def update_car(
    car_id: int,
    car_data: CarUpdate,
    inventory: Annotated[InventoryRepository, Depends(get_inventory_repository)],
):
    """Update some fields of a car."""
    car = inventory.update(car_id, car_data)
    return CarMutationResponse(
        message="Car updated successfully!", car=CarResponse.model_validate(car)
    )


@router.delete(
    "/{car_id}", response_model=MessageResponse, dependencies=[Depends(require_inventory_writer)]
)
def delete_car(
    car_id: int,
    inventory: Annotated[InventoryRepository, Depends(get_inventory_repository)],
):
    """Remove a car from the inventory."""
    inventory.delete(car_id)
    return MessageResponse(message="Car deleted successfully!")
