"""
Service layer.

``user_store`` owns the in‑memory collection, ``user_query`` filters,
sorts and paginates snapshots of it, and ``user_service`` ties both to
the API.  Swapping the store for a database should not require changes
to the endpoints.
"""
