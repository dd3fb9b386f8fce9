"""
Zense Backend - Password Hashing & Access Tokens
=================================================

What:  The two credential primitives of the API.
       - passwords: werkzeug salted hashes (never stored or logged in clear)
       - tokens:    HS256 JWTs carrying `user_id` and `exp`
Who:   UserService (login/register/update) and AuthMiddleware.

Token lifecycle:
    login → create_access_token(user_id)  (valid JWT_ACCESS_TOKEN_MINUTES)
    request → decode_access_token(bearer) → user_id
    Expired, malformed and wrongly-signed tokens all raise the same
    AuthenticationError, so clients only ever see one 401 shape.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from zense.config import settings
from zense.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def create_access_token(
    user_id: int,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Sign an access token for `user_id`.

    Args:
        user_id: Authenticated user's primary key (the `user_id` claim)
        expires_delta: Lifetime override; defaults to the configured minutes
        now: Issue time override (tests use it to mint already-expired tokens)
    """
    issued_at = now or datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.jwt_access_token_minutes)
    payload = {
        "user_id": user_id,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> int:
    """
    Validate a bearer token and return the user id it carries.

    Raises:
        AuthenticationError: expired, bad signature, malformed, or no user_id claim
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        logger.info("Rejected expired access token")
        raise AuthenticationError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        logger.info("Rejected invalid access token: %s", type(e).__name__)
        raise AuthenticationError("Invalid token") from e

    user_id = payload.get("user_id")
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise AuthenticationError("Invalid token")
    return user_id
