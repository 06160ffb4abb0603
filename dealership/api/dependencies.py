"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from dealership.context import AppContext
from dealership.database import get_db
from dealership.exceptions import AuthenticationError, ValidationError
from dealership.models.user import User
from dealership.schemas.car import CarFilter
from dealership.services.auth import AuthService
from dealership.services.inventory import InventoryRepository

# Missing credentials are reported through AuthenticationError, not FastAPI's 403
security = HTTPBearer(auto_error=False)


def get_context(request: Request) -> AppContext:
    """Get the application context built at startup."""
    return request.app.state.context


def get_auth_service(
    context: Annotated[AppContext, Depends(get_context)],
    db: Annotated[Session, Depends(get_db)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, context.hasher, context.tokens)


def get_inventory_repository(
    db: Annotated[Session, Depends(get_db)],
) -> InventoryRepository:
    """Get inventory repository with dependencies."""
    return InventoryRepository(db)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User:
    """Get the current authenticated user from the bearer token."""
    if credentials is None:
        raise AuthenticationError("Missing bearer token")
    return auth_service.authenticate(credentials.credentials)


def require_inventory_writer(
    context: Annotated[AppContext, Depends(get_context)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> User | None:
    """Guard for inventory mutations.

    Returns the authenticated user, or None when the deployment allows
    anonymous inventory writes.
    """
    if not context.settings.inventory_writes_require_auth:
        return None
    return get_current_user(credentials, auth_service)


def get_car_filter(
    price: Annotated[str | None, Query(description="Maximum price (inclusive)")] = None,
    mileage: Annotated[str | None, Query(description="Maximum mileage (inclusive)")] = None,
    color: Annotated[str | None, Query(description="Exact color")] = None,
) -> CarFilter:
    """Build inventory filters from query parameters."""
    try:
        return CarFilter(max_price=price, max_mileage=mileage, color=color)
    except PydanticValidationError as e:
        raise ValidationError.from_errors(e.errors(), "Invalid inventory filter") from e
