"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from dealership.api.dependencies import get_auth_service, get_current_user
from dealership.models.user import User
from dealership.schemas.auth import MessageResponse, Token, UserLogin, UserResponse, UserSignup
from dealership.services.auth import AuthService

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserSignup,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user. Log in separately to obtain a token."""
    auth_service.signup(user_data.email, user_data.password, user_data.confirm_password)
    return MessageResponse(message="User created successfully!")


@router.post("/login", response_model=Token)
def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    token = auth_service.login(credentials.email, credentials.password)
    return Token(token=token)


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user
