"""Services Layer: stateful operations over project aggregates and the activity log.

Invariants:
    - Services own transaction boundaries (commit/rollback); routes never commit
    - Pure decisions (positions, record edits) are delegated to core/
"""
