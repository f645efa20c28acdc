"""
User endpoints for API v1.

CRUD routes for the single ``users`` resource.  Listing supports
``limit``, ``offset``, ``role`` and ``sort=field:direction`` query
parameters, e.g. ``GET /api/v1/users?limit=10&offset=0&role=student&sort=name:asc``.

Successful responses are wrapped in ``{"data": ...}`` (plus ``meta``
for lists); failures use the error envelope from ``core.errors``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status

from classroom_users_api.app.core.errors import user_not_found, validation_error
from classroom_users_api.app.schemas.user import UserCreate, UserItemResponse, UserListResponse, UserUpdate
from classroom_users_api.app.services.user_service import UserService, get_user_service
from classroom_users_api.app.services.user_store import DuplicateEmailError

router = APIRouter()


@router.get("", response_model=UserListResponse, response_model_exclude_none=True)
async def list_users(
    limit: int = Query(10, description="Page size; clamped to 1..100"),
    offset: int = Query(0, description="Number of users to skip; negative values count as 0"),
    role: Optional[str] = Query(None, description="Only return users with exactly this role"),
    sort: Optional[str] = Query(None, description="Sort as field:direction, e.g. name:asc or createdAt:desc"),
    service: UserService = Depends(get_user_service),
) -> UserListResponse:
    """List users with filtering, sorting and pagination.

    ``meta.total`` is the number of users matching ``role`` before the
    page is cut.  Unknown sort fields are ignored.
    """
    return await service.list_users(limit=limit, offset=offset, role=role, sort=sort)


@router.get("/{user_id}", response_model=UserItemResponse, response_model_exclude_none=True)
async def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> UserItemResponse:
    """Retrieve a single user by ID."""
    user = await service.get_user(user_id)
    if user is None:
        raise user_not_found(user_id)
    return UserItemResponse(data=user)


@router.post(
    "",
    response_model=UserItemResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    payload: UserCreate,
    request: Request,
    response: Response,
    service: UserService = Depends(get_user_service),
) -> UserItemResponse:
    """Create a user.

    ``role`` defaults to ``student``.  The ``Location`` header points at
    the new resource.  A clashing e‑mail (case‑insensitive) is a 400.
    """
    try:
        user = await service.create_user(payload)
    except DuplicateEmailError as e:
        raise validation_error(str(e))
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{user.id}"
    return UserItemResponse(data=user)


@router.put("/{user_id}", response_model=UserItemResponse, response_model_exclude_none=True)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> UserItemResponse:
    """Update an existing user (partial updates allowed)."""
    try:
        user = await service.update_user(user_id, payload)
    except DuplicateEmailError as e:
        raise validation_error(str(e))
    if user is None:
        raise user_not_found(user_id)
    return UserItemResponse(data=user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> Response:
    """Delete a user; 204 on success, 404 if it did not exist."""
    deleted = await service.delete_user(user_id)
    if not deleted:
        raise user_not_found(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
