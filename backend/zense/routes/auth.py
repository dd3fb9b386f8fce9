"""
Authentication routes: login and register.

Both are on the AuthMiddleware skip list, so they work without a token.
"""

from fastapi import APIRouter, Depends, status

from zense.config import settings
from zense.dependencies import get_user_service
from zense.schemas.common import ErrorResponse
from zense.schemas.user import (
    UserAuthResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
)
from zense.services.user_service import UserService

router = APIRouter(prefix=f"{settings.api_prefix}/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=UserAuthResponse,
    responses={401: {"description": "Invalid email or password", "model": ErrorResponse}},
    summary="Exchange email and password for an access token",
)
async def login(
    payload: UserLoginRequest,
    users: UserService = Depends(get_user_service),
) -> UserAuthResponse:
    return await users.login(payload)


@router.post(
    "/register",
    response_model=UserResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Email already registered", "model": ErrorResponse}},
    summary="Create an account",
)
async def register(
    payload: UserRegisterRequest,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    return await users.register(payload)
