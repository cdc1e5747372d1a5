"""Seminary Site Package — API backend for the seminary's public site and admin panel.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
