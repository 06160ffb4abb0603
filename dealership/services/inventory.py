"""Inventory repository: CRUD and filtered queries over cars."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from dealership.database import store_errors
from dealership.exceptions import NotFoundError, ValidationError
from dealership.models.car import Car
from dealership.schemas.car import CarCreate, CarFilter, CarUpdate

logger = logging.getLogger(__name__)


def _coerce(schema: type, fields: Any, message: str):
    if isinstance(fields, schema):
        return fields
    try:
        return schema.model_validate(fields)
    except PydanticValidationError as e:
        raise ValidationError.from_errors(e.errors(), message) from e


class InventoryRepository:
    """Store access for car records.

    There is no ownership check here: anything that reaches the repository
    may read or change any car. Access control lives in the HTTP layer.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, fields: CarCreate | Mapping[str, Any]) -> Car:
        """Validate and persist a new car."""
        car_data = _coerce(CarCreate, fields, "Invalid car data")

        car = Car(**car_data.model_dump(mode="json"))
        with store_errors(self.db, "add car"):
            self.db.add(car)
            self.db.commit()
            self.db.refresh(car)

        logger.info(f"Added car {car.id} ({car.title})")
        return car

    def list(self, filters: CarFilter | Mapping[str, Any] | None = None) -> list[Car]:
        """Return every car matching all supplied filters."""
        filters = _coerce(CarFilter, filters or {}, "Invalid inventory filter")

        query = self.db.query(Car)
        if filters.max_price is not None:
            query = query.filter(Car.price <= filters.max_price)
        if filters.max_mileage is not None:
            query = query.filter(Car.mileage <= filters.max_mileage)
        if filters.color is not None:
            query = query.filter(Car.color == filters.color)

        with store_errors(self.db, "fetch cars"):
            return query.order_by(Car.id).all()

    def get(self, car_id: int) -> Car:
        """Get a car by id."""
        with store_errors(self.db, "fetch car"):
            car = self.db.get(Car, car_id)
        if car is None:
            raise NotFoundError("Car not found")
        return car

    def update(self, car_id: int, fields: CarUpdate | Mapping[str, Any]) -> Car:
        """Change only the supplied fields of a car and return the full record."""
        car_data = _coerce(CarUpdate, fields, "Invalid car data")
        car = self.get(car_id)

        changes = car_data.model_dump(mode="json", exclude_unset=True)
        for field, value in changes.items():
            setattr(car, field, value)

        with store_errors(self.db, "update car"):
            self.db.commit()
            self.db.refresh(car)

        logger.info(f"Updated car {car.id}: {sorted(changes)}")
        return car

    def delete(self, car_id: int) -> None:
        """Remove a car permanently."""
        car = self.get(car_id)
        with store_errors(self.db, "delete car"):
            self.db.delete(car)
            self.db.commit()

        logger.info(f"Deleted car {car_id}")
