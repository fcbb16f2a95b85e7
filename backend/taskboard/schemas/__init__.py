"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at the HTTP boundary; services receive already-clean values
    - Enums from core/domain_types.py are used for stage and role fields
"""
