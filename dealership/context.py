"""Per-application resources shared by every request."""

from dataclasses import dataclass

from dealership.config import Settings
from dealership.database import Database
from dealership.services.passwords import PasswordHasher
from dealership.services.tokens import TokenService


@dataclass
class AppContext:
    """Everything a request handler needs that outlives a single request.

    Built once per application, initialized before serving, closed on shutdown.
    """

    settings: Settings
    database: Database
    hasher: PasswordHasher
    tokens: TokenService

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        return cls(
            settings=settings,
            database=Database(settings.database_url),
            hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
            tokens=TokenService(
                settings.jwt_secret,
                previous_secrets=settings.jwt_previous_secrets,
                algorithm=settings.jwt_algorithm,
                ttl_seconds=settings.jwt_expiration_seconds,
            ),
        )

    def init(self) -> None:
        self.database.init()

    def close(self) -> None:
        self.database.close()
