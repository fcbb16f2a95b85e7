"""API Layer: FastAPI routes, service providers and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes hold no business logic and never commit; services do
"""
