"""
User domain model.

``UserRecord`` is the single entity of the API.  ``UserPatch`` lists
the fields an update may change; anything not present on the patch can
never reach a stored record.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Roles a classroom user may hold."""

    STUDENT = "student"
    INSTRUCTOR = "instructor"


DEFAULT_ROLE = Role.STUDENT


@dataclass
class UserRecord:
    id: str
    name: str
    email: str
    role: Role
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass
class UserPatch:
    """Partial update for a user.

    ``None`` means "not supplied"; the store leaves the matching field
    untouched.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[Role] = None
