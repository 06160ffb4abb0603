"""Authentication service: signup, login and bearer-token resolution."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from dealership.database import store_errors
from dealership.exceptions import (
    AuthenticationError,
    EmailTakenError,
    InvalidCredentialsError,
    PasswordMismatchError,
    UserNotFoundError,
)
from dealership.models.user import User
from dealership.services.passwords import PasswordHasher
from dealership.services.tokens import TokenService

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    with store_errors(db, "look up user"):
        return db.query(User).filter(User.email == email).first()


class AuthService:
    """Service for account creation and credential checks."""

    def __init__(self, db: Session, hasher: PasswordHasher, tokens: TokenService):
        self.db = db
        self.hasher = hasher
        self.tokens = tokens

    def signup(self, email: str, password: str, confirm_password: str) -> User:
        """Create a user account. No token is issued; the caller logs in separately."""
        if password != confirm_password:
            raise PasswordMismatchError()

        # Advisory only: the unique constraint on users.email is what actually
        # prevents duplicates when two signups race.
        if get_user_by_email(self.db, email) is not None:
            raise EmailTakenError()

        user = User(email=email, password_hash=self.hasher.hash(password))
        with store_errors(self.db, "create user"):
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                raise EmailTakenError() from e
            self.db.refresh(user)

        logger.info(f"Created user {user.id}")
        return user

    def login(self, email: str, password: str) -> str:
        """Check credentials and return a fresh bearer token."""
        user = get_user_by_email(self.db, email)
        if user is None:
            logger.info("Login failed: unknown email")
            raise UserNotFoundError()

        if not self.hasher.verify(password, user.password_hash):
            logger.info(f"Login failed: bad password for user {user.id}")
            raise InvalidCredentialsError()

        logger.info(f"User {user.id} logged in")
        return self.tokens.issue(user.id)

    def authenticate(self, token: str) -> User:
        """Resolve a bearer token to the user it was issued for."""
        subject = self.tokens.verify(token)
        try:
            user_id = int(subject)
        except ValueError as e:
            raise AuthenticationError() from e

        with store_errors(self.db, "load user"):
            user = self.db.get(User, user_id)
        if user is None:
            raise AuthenticationError("User not found")
        return user
