"""
Pydantic schema definitions for API payloads.

Schemas are separated from the domain dataclasses in ``models`` so the
API representation (camelCase JSON, validation rules) can change
without touching the store.
"""
