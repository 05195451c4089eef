"""
Core module: exceptions, settings, database plumbing, the per-sheet DAO and
the Model service.

Submodules are imported directly (``sheets_orm.core.base_service``) so the
schema and store packages can depend on ``sheets_orm.core.exceptions``
without import cycles.
"""
