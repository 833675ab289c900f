"""Infrastructure Layer — database, logging and credential hashing.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All database errors mapped to core errors before reaching routes

Design Decisions:
    - Thin wrappers over third-party clients (SQLAlchemy, bcrypt)
"""
