"""Services Layer — ownership-scoped site CRUD, accounts, identity and repositories.

Invariants:
    - Services receive repositories through the constructor (one per request)
    - Repositories are the only modules here that touch SQLAlchemy

Design Decisions:
    - One file per concern for locality
"""
