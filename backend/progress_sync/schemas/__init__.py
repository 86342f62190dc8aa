"""Pydantic Schemas — response validation for API endpoints.

Invariants:
    - Schemas describe the API contract; core/domain_types describes persistence

Design Decisions:
    - Separate from core: schemas are API contracts (ADR: DDD boundary)
"""
