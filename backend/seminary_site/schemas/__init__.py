"""Pydantic Schemas — backend records, admin inputs and page payloads.

Invariants:
    - Schemas validate at system boundary (form input, backend rows, API responses)
    - Every row received from the backend is parsed into its record type

Design Decisions:
    - Record types double as API response models: no separate persistence layer
"""
