from shared.database.postgres import (
    Base,
    get_async_session_factory,
    insert_ignoring_conflicts,
)

__all__ = ["Base", "get_async_session_factory", "insert_ignoring_conflicts"]
