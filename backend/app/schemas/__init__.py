"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain types from core/ used for enum fields
    - Wire names are camelCase (tokensBalance, wpConfig, createdAt); Python names are snake_case

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - populate_by_name: request bodies accept either spelling
"""
