"""Infrastructure Layer: database sessions and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Storage failures surface as core/errors.py types, never raw driver exceptions
"""
