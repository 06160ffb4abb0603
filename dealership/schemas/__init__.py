"""Pydantic schemas for API requests and responses."""

from dealership.schemas.auth import MessageResponse, Token, UserLogin, UserResponse, UserSignup
from dealership.schemas.car import (
    CarCreate,
    CarFilter,
    CarMutationResponse,
    CarResponse,
    CarUpdate,
)

__all__ = [
    "UserSignup",
    "UserLogin",
    "Token",
    "UserResponse",
    "MessageResponse",
    "CarCreate",
    "CarUpdate",
    "CarFilter",
    "CarResponse",
    "CarMutationResponse",
]
