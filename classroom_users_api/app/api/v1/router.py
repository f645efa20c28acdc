"""
Top‑level router for version 1 of the API.

This router aggregates domain‑specific routers under a unified prefix.
Only ``users`` exists today; new resources get their own module in
``endpoints`` and are included here.
"""

from fastapi import APIRouter

from .endpoints import users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
