"""
Application package initializer.

The API is organised in layers: ``api`` (versioned routers),
``schemas`` (pydantic request/response models), ``services`` (business
logic, the in‑memory store and the query engine), ``models`` (domain
dataclasses) and ``core`` (configuration, logging and error handling).
"""

from .main import app  # noqa: F401
