"""SQLAlchemy models."""

from dealership.models.car import Car
from dealership.models.user import User

__all__ = [
    "User",
    "Car",
]
