"""
Zense Backend - Persistence Contracts
======================================

What:  Structural (Protocol) contracts for every entity store.
Why:   Services depend on these capability sets, not on SQLAlchemy, so a
       test or an alternative backend can supply any object with the same
       methods.

Invariants:
    - find_by_id returns None for a missing row, never raises
    - find_all returns a list (possibly empty); emptiness is a service concern
    - write methods flush but never commit (the request session commits)
"""

from typing import List, Optional, Protocol, Sequence

from zense.models import Comment, Forum, Journal, Topic, User


class UserStore(Protocol):
    async def create(self, user: User) -> User: ...
    async def find_all(self) -> List[User]: ...
    async def find_by_id(self, user_id: int) -> Optional[User]: ...
    async def find_by_email(self, email: str) -> Optional[User]: ...
    async def update(self, user: User) -> User: ...
    async def delete(self, user: User) -> None: ...


class JournalStore(Protocol):
    async def create(self, journal: Journal) -> Journal: ...
    async def find_all(self) -> List[Journal]: ...
    async def find_by_id(self, journal_id: int) -> Optional[Journal]: ...
    async def update(self, journal: Journal) -> Journal: ...
    async def delete(self, journal: Journal) -> None: ...


class TopicStore(Protocol):
    async def create(self, topic: Topic) -> Topic: ...
    async def find_all(self) -> List[Topic]: ...
    async def find_by_id(self, topic_id: int) -> Optional[Topic]: ...
    async def find_by_ids(self, topic_ids: Sequence[int]) -> List[Topic]: ...
    async def update(self, topic: Topic) -> Topic: ...
    async def delete(self, topic: Topic) -> None: ...


class ForumStore(Protocol):
    async def create(self, forum: Forum) -> Forum: ...
    async def find_all(self) -> List[Forum]: ...
    async def find_by_id(self, forum_id: int) -> Optional[Forum]: ...
    async def update(self, forum: Forum) -> Forum: ...
    async def clear_topics(self, forum: Forum) -> Forum: ...
    async def delete(self, forum: Forum) -> None: ...


class CommentStore(Protocol):
    async def create(self, comment: Comment) -> Comment: ...
    async def find_all(self) -> List[Comment]: ...
    async def find_by_id(self, comment_id: int) -> Optional[Comment]: ...
    async def update(self, comment: Comment) -> Comment: ...
    async def delete(self, comment: Comment) -> None: ...
