"""
In‑memory record store for users.

``UserStore`` owns the authoritative list of users and is the only
object allowed to mutate it.  It guarantees that ids are unique and
that no two users share an e‑mail address (compared case‑insensitively).
Every mutation runs under one lock and either applies completely or
not at all.  Records leaving the store are copies, so callers can never
change stored state behind the store's back.

The store neither logs nor touches I/O; the service layer above it
does that.
"""

import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from ..models.user import DEFAULT_ROLE, Role, UserPatch, UserRecord


class DuplicateEmailError(ValueError):
    """Raised when a create or update would reuse an existing e‑mail."""

    def __init__(self, email: str):
        super().__init__("Email already exists")
        self.email = email


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_user_id() -> str:
    return str(uuid.uuid4())


class UserStore:
    """Owned, lock‑protected collection of ``UserRecord`` objects."""

    def __init__(
        self,
        initial: Optional[Iterable[UserRecord]] = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_user_id,
    ) -> None:
        self._users: List[UserRecord] = []
        self._lock = threading.Lock()
        self._clock = clock
        self._id_factory = id_factory
        for record in initial or ():
            self._insert(replace(record))

    def __len__(self) -> int:
        return len(self._users)

    def create(self, name: str, email: str, role: Optional[Role] = None) -> UserRecord:
        """Add a new user and return a copy of it.

        Raises ``DuplicateEmailError`` if the e‑mail is already taken.
        """
        with self._lock:
            if self._find_by_email(email) is not None:
                raise DuplicateEmailError(email)
            record = UserRecord(
                id=self._new_id(),
                name=name,
                email=email,
                role=Role(role) if role is not None else DEFAULT_ROLE,
                created_at=self._clock(),
            )
            self._users.append(record)
            return replace(record)

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            index = self._index_of(user_id)
            if index is None:
                return None
            return replace(self._users[index])

    def update(self, user_id: str, patch: UserPatch) -> Optional[UserRecord]:
        """Apply ``patch`` to the user with ``user_id``.

        Returns ``None`` if there is no such user.  Raises
        ``DuplicateEmailError`` if ``patch.email`` belongs to a
        different user.  Only fields set on the patch are changed and
        ``updated_at`` is stamped on success.
        """
        with self._lock:
            index = self._index_of(user_id)
            if index is None:
                return None
            if patch.email is not None:
                owner = self._find_by_email(patch.email)
                if owner is not None and owner.id != user_id:
                    raise DuplicateEmailError(patch.email)

            # Build the new version first so a failure leaves the stored
            # record untouched.
            updated = replace(self._users[index])
            if patch.name is not None:
                updated.name = patch.name
            if patch.email is not None:
                updated.email = patch.email
            if patch.role is not None:
                updated.role = Role(patch.role)
            updated.updated_at = self._clock()

            self._users[index] = updated
            return replace(updated)

    def remove(self, user_id: str) -> bool:
        """Delete the user with ``user_id``; ``False`` if it did not exist."""
        with self._lock:
            index = self._index_of(user_id)
            if index is None:
                return False
            del self._users[index]
            return True

    def list_all(self) -> List[UserRecord]:
        """Snapshot of every user in insertion order."""
        with self._lock:
            return [replace(record) for record in self._users]

    def _insert(self, record: UserRecord) -> None:
        if self._index_of(record.id) is not None:
            raise ValueError(f"User id {record.id} already present")
        if self._find_by_email(record.email) is not None:
            raise DuplicateEmailError(record.email)
        self._users.append(record)

    def _new_id(self) -> str:
        user_id = self._id_factory()
        while self._index_of(user_id) is not None:
            user_id = self._id_factory()
        return user_id

    def _index_of(self, user_id: str) -> Optional[int]:
        for index, record in enumerate(self._users):
            if record.id == user_id:
                return index
        return None

    def _find_by_email(self, email: str) -> Optional[UserRecord]:
        wanted = email.lower()
        for record in self._users:
            if record.email.lower() == wanted:
                return record
        return None
