"""
Domain models.

Plain dataclasses describing the records held by the in‑memory store.
They carry no validation of their own; request payloads are validated
by the pydantic schemas in ``schemas`` before they are converted into
these types.
"""
