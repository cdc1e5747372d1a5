"""Infrastructure Layer — hosted backend client and cross-cutting concerns.

Invariants:
    - Infrastructure imports only errors and the classifier from core/
    - All external calls wrapped with retry/timeout/error mapping

Design Decisions:
    - Resilient wrapper over a raw httpx client instead of a vendor SDK
"""
