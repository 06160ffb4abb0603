"""Domain services."""

from dealership.services.auth import AuthService
from dealership.services.inventory import InventoryRepository
from dealership.services.passwords import PasswordHasher
from dealership.services.tokens import TokenService

__all__ = ["AuthService", "InventoryRepository", "PasswordHasher", "TokenService"]
