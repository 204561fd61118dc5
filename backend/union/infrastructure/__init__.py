"""Infrastructure Layer — database access, password hashing and logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All database failures surface as core.errors.DatabaseError
"""
