"""Services — query and action functions over an injected AsyncSession.

Invariants:
    - Every operation receives its store client explicitly (no module-level handle)
    - Every query issues exactly one statement
    - Read failures raise DataFetchError; create/update failures return ActionState

Design Decisions:
    - Plain async functions over handler classes: operations share no state
"""
