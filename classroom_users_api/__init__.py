"""
Top‑level package for the Classroom Users API.

All functionality lives in submodules under ``app``; import the ASGI
application from ``classroom_users_api.app.main``.
"""

__all__ = []
