"""
Business logic for users.

``UserService`` sits between the HTTP endpoints and the in‑memory
``UserStore``.  It turns validated request schemas into store calls,
runs list queries through ``query_users`` and converts records back
into response schemas.  The methods are ``async`` so the endpoints do
not change if the store is swapped for a real database later.

Expected outcomes are reported the same way the store reports them:
``None`` / ``False`` for a missing user and ``DuplicateEmailError`` for
an e‑mail clash.  Mapping those to HTTP responses is the endpoint's job.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Request

from ..models.user import Role, UserRecord
from ..schemas.user import UserCreate, UserListMeta, UserListResponse, UserRead, UserUpdate
from .user_query import QueryOptions, clamp_limit, clamp_offset, parse_sort, query_users
from .user_store import UserStore

logger = logging.getLogger(__name__)

SEED_CREATED_AT = datetime(2025, 9, 24, tzinfo=timezone.utc)


def seed_users() -> List[UserRecord]:
    """The three users every classroom copy of the API starts with."""
    return [
        UserRecord(
            id="11111111-1111-4111-8111-111111111111",
            name="Asha",
            email="asha@example.com",
            role=Role.STUDENT,
            created_at=SEED_CREATED_AT,
        ),
        UserRecord(
            id="22222222-2222-4222-8222-222222222222",
            name="Ravi",
            email="ravi@example.com",
            role=Role.STUDENT,
            created_at=SEED_CREATED_AT,
        ),
        UserRecord(
            id="33333333-3333-4333-8333-333333333333",
            name="Maya",
            email="maya@example.com",
            role=Role.INSTRUCTOR,
            created_at=SEED_CREATED_AT,
        ),
    ]


class UserService:
    """Service wrapping a ``UserStore`` for the API layer."""

    def __init__(self, store: Optional[UserStore] = None) -> None:
        self.store = store if store is not None else UserStore()

    @classmethod
    def with_seed_data(cls) -> "UserService":
        return cls(UserStore(initial=seed_users()))

    async def list_users(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        role: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> UserListResponse:
        """Return one page of users together with pagination metadata.

        ``limit`` and ``offset`` are clamped rather than rejected and the
        clamped values are what ``meta`` reports.  ``role`` and ``sort``
        are echoed back when given.
        """
        options = QueryOptions(
            role=role or None,
            sort=parse_sort(sort),
            limit=clamp_limit(limit),
            offset=clamp_offset(offset),
        )
        result = query_users(self.store.list_all(), options)
        meta = UserListMeta(
            limit=options.limit,
            offset=options.offset,
            total=result.total,
            role=options.role,
            sort=sort or None,
        )
        return UserListResponse(meta=meta, data=[UserRead.from_record(user) for user in result.items])

    async def get_user(self, user_id: str) -> Optional[UserRead]:
        record = self.store.get_by_id(user_id)
        return UserRead.from_record(record) if record else None

    async def create_user(self, data: UserCreate) -> UserRead:
        """Create a user; raises ``DuplicateEmailError`` on an e‑mail clash."""
        logger.info("Creating new user: %s", data.name)
        record = self.store.create(name=data.name, email=data.email, role=data.role)
        logger.info("Created user %s", record.id)
        return UserRead.from_record(record)

    async def update_user(self, user_id: str, data: UserUpdate) -> Optional[UserRead]:
        """Apply a partial update; ``None`` if the user does not exist."""
        logger.info("Updating user: %s", user_id)
        record = self.store.update(user_id, data.to_patch())
        return UserRead.from_record(record) if record else None

    async def delete_user(self, user_id: str) -> bool:
        logger.info("Deleting user: %s", user_id)
        deleted = self.store.remove(user_id)
        if not deleted:
            logger.info("User %s not found for deletion", user_id)
        return deleted


def get_user_service(request: Request) -> UserService:
    """FastAPI dependency returning the service attached to the app."""
    return request.app.state.user_service
