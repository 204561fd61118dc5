"""Services — the registries that own every state mutation.

Invariants:
    - Each registry receives its DatabaseSessionManager at construction (no globals)
    - Registries return core.records dataclasses, never ORM instances
    - Absent entities come back as None/False; only the HTTP shell raises 404
"""
