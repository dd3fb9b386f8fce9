"""
User routes.

/users/me is declared before /users/{user_id} so "me" is never parsed as
an id. Listing and lookup by id are public; the rest needs a token.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from zense.config import settings
from zense.dependencies import get_current_user_id, get_user_service
from zense.routes import OWNED_WRITE_ERRORS
from zense.schemas.user import UserResponse, UserUpdateRequest
from zense.services.user_service import UserService

router = APIRouter(prefix=f"{settings.api_prefix}/users", tags=["Users"])


@router.get("", response_model=List[UserResponse], response_model_exclude_none=True)
async def list_users(users: UserService = Depends(get_user_service)):
    return await users.find_all()


@router.get("/me", response_model=UserResponse, summary="The caller's own profile")
async def get_me(
    caller_id: int = Depends(get_current_user_id),
    users: UserService = Depends(get_user_service),
):
    return await users.find_me(caller_id)


@router.get("/{user_id}", response_model=UserResponse, response_model_exclude_none=True)
async def get_user(user_id: int, users: UserService = Depends(get_user_service)):
    return await users.find_by_id(user_id)


@router.put("/{user_id}", response_model=UserResponse, responses=OWNED_WRITE_ERRORS)
async def update_user(
    user_id: int,
    payload: UserUpdateRequest,
    caller_id: int = Depends(get_current_user_id),
    users: UserService = Depends(get_user_service),
):
    return await users.update(user_id, caller_id, payload)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=OWNED_WRITE_ERRORS,
)
async def delete_user(
    user_id: int,
    caller_id: int = Depends(get_current_user_id),
    users: UserService = Depends(get_user_service),
) -> Response:
    await users.delete(user_id, caller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
