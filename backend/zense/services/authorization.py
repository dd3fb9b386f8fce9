"""
Zense Backend - Ownership Check
================================

What:  The single fetch-then-compare step shared by every mutating service
       call (update, delete, topic removal).
Why one helper: journals, forums, comments and user accounts all follow the
       same rule, so the rule lives in one place.

Flow:
    fetch(entity_id) ── None ──▶ NotFoundError        (404)
          │
          ▼
    owner_of(entity) != caller_id ──▶ ForbiddenError   (403, nothing written)
          │
          ▼
       entity  (caller may mutate it)
"""

from typing import Awaitable, Callable, Optional, TypeVar

from zense.exceptions import ForbiddenError, NotFoundError

T = TypeVar("T")


def _user_id_of(entity) -> int:
    return entity.user_id


async def fetch_owned(
    fetch: Callable[[int], Awaitable[Optional[T]]],
    entity_id: int,
    caller_id: int,
    *,
    resource: str,
    owner_of: Callable[[T], int] = _user_id_of,
    action: str = "update",
) -> T:
    entity = await fetch(entity_id)
    if entity is None:
        raise NotFoundError(resource=resource, resource_id=entity_id)
    if owner_of(entity) != caller_id:
        raise ForbiddenError(
            resource=resource,
            action=action,
            context={"resource_id": str(entity_id), "caller_id": str(caller_id)},
        )
    return entity
