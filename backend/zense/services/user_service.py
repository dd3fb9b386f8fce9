"""
Zense Backend - User & Authentication Service
==============================================

What:  Registration, login and account management.
Who:   Auth routes (login/register) and user routes (profile CRUD).

Authentication rules:
    - login: unknown email and wrong password fail identically with
      AuthenticationError("Invalid email or password"); a success returns
      {id, name, token}
    - register: duplicate email is ConflictError, the existing account is
      never touched; the password is stored as a werkzeug hash
    - update/delete: only the account holder (owner of a user row is the
      row itself)

Projection rule:
    email is only returned on the caller's own profile (find_me, update).
"""

import logging
from typing import List

from zense.exceptions import AuthenticationError, ConflictError, NotFoundError
from zense.models import User
from zense.repositories import UserStore
from zense.schemas.user import (
    UserAuthResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
    UserUpdateRequest,
)
from zense.security import create_access_token, hash_password, verify_password
from zense.services.authorization import fetch_owned
from zense.services.common import changed_fields

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def to_response(user: User, include_email: bool = False) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email if include_email else None,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def _own_id(user: User) -> int:
    return user.id


class UserService:
    def __init__(self, users: UserStore):
        self.users = users

    # ── Authentication ────────────────────────────────────────────────────

    async def login(self, payload: UserLoginRequest) -> UserAuthResponse:
        user = await self.users.find_by_email(payload.email)
        if user is None or not verify_password(user.password, payload.password):
            logger.info("Failed login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)
        logger.info("User %d logged in", user.id)
        return UserAuthResponse(id=user.id, name=user.name, token=create_access_token(user.id))

    async def register(self, payload: UserRegisterRequest) -> UserResponse:
        if await self.users.find_by_email(payload.email) is not None:
            raise ConflictError(message="Email is already registered")
        user = await self.users.create(
            User(
                name=payload.name,
                email=payload.email,
                password=hash_password(payload.password),
            )
        )
        logger.info("User %d registered", user.id)
        return to_response(user, include_email=True)

    # ── Profiles ──────────────────────────────────────────────────────────

    async def find_all(self) -> List[UserResponse]:
        users = await self.users.find_all()
        if not users:
            raise NotFoundError(resource="user")
        return [to_response(user) for user in users]

    async def find_by_id(self, user_id: int) -> UserResponse:
        user = await self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return to_response(user)

    async def find_me(self, user_id: int) -> UserResponse:
        user = await self.users.find_by_id(user_id)
        if user is None:
            # Valid token for an account deleted since it was issued
            raise NotFoundError(resource="user", resource_id=user_id)
        return to_response(user, include_email=True)

    async def update(
        self, user_id: int, caller_id: int, payload: UserUpdateRequest,
    ) -> UserResponse:
        fields = changed_fields(payload)
        user = await fetch_owned(
            self.users.find_by_id, user_id, caller_id, resource="user", owner_of=_own_id,
        )
        email = fields.get("email")
        if email is not None and email != user.email:
            if await self.users.find_by_email(email) is not None:
                raise ConflictError(message="Email is already registered")
        if "password" in fields:
            fields["password"] = hash_password(fields["password"])

        for name, value in fields.items():
            setattr(user, name, value)
        user = await self.users.update(user)
        logger.info("User %d updated (%s)", user_id, ", ".join(sorted(fields)))
        return to_response(user, include_email=True)

    async def delete(self, user_id: int, caller_id: int) -> None:
        user = await fetch_owned(
            self.users.find_by_id, user_id, caller_id,
            resource="user", owner_of=_own_id, action="delete",
        )
        await self.users.delete(user)
        logger.info("User %d deleted their account", user_id)
