"""
Pydantic models for user data.

``UserCreate`` and ``UserUpdate`` validate request bodies before they
reach the service layer; ``UserRead`` is the public JSON shape of a
user.  Unknown fields in request bodies are ignored, which matches the
"strip unknown" behaviour students see in the Postman exercises.

Field names are snake_case in Python and camelCase on the wire
(``createdAt``, ``updatedAt``).
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic_core import PydanticCustomError

from ..models.user import DEFAULT_ROLE, Role, UserPatch, UserRecord

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def check_email(value: str) -> str:
    """Validate e‑mail syntax and return the address exactly as sent.

    Uniqueness is compared case‑insensitively by the store, so the
    normalised form email‑validator computes is not kept.
    """
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}")
    return value


class UserCreate(BaseModel):
    """Schema for creating a user (``POST /users``)."""

    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH, examples=["Alex Johnson"])
    email: str = Field(..., examples=["alex@example.com"])
    role: Role = Field(DEFAULT_ROLE, examples=["student"])

    @field_validator("email")
    @classmethod
    def validate_email_syntax(cls, value: str) -> str:
        return check_email(value)


class UserUpdate(BaseModel):
    """Schema for updating a user (``PUT /users/{id}``).

    All fields are optional but at least one must be supplied.  An
    explicit ``null`` is rejected rather than treated as "not supplied".
    """

    name: Optional[str] = Field(None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    email: Optional[str] = None
    role: Optional[Role] = None

    @field_validator("name", "email", "role", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise PydanticCustomError("null_value", "Value must not be null")
        return value

    @field_validator("email")
    @classmethod
    def validate_email_syntax(cls, value: str) -> str:
        return check_email(value)

    @model_validator(mode="after")
    def require_one_field(self) -> "UserUpdate":
        if not self.model_fields_set:
            raise PydanticCustomError("object_min", "At least one field must be provided for update")
        return self

    def to_patch(self) -> UserPatch:
        return UserPatch(name=self.name, email=self.email, role=self.role)


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    role: Role
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @field_serializer("created_at", "updated_at")
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        return format_timestamp(value)

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserRead":
        return cls(
            id=record.id,
            name=record.name,
            email=record.email,
            role=record.role,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class UserListMeta(BaseModel):
    """Pagination data echoed back with a list of users."""

    limit: int
    offset: int
    total: int
    role: Optional[str] = None
    sort: Optional[str] = None


class UserItemResponse(BaseModel):
    data: UserRead


class UserListResponse(BaseModel):
    meta: UserListMeta
    data: List[UserRead]
