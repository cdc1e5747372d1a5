"""Services Layer — page assembly, form submission and admin CRUD.

Invariants:
    - Services own all backend IO; core/ decides, services fetch and persist
    - Resource registry uses an explicit list (no auto-discovery)

Design Decisions:
    - One service per audience: visitors (content), applicants (registration), admins
"""
