"""
Domain converters between Supabase rows and the domain models.

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import db_row_to_session, session_to_db_row

    >>> session = db_row_to_session({
    ...     "id": "s1",
    ...     "user_id": "user_1",
    ...     "status": "active",
    ...     "started_at": "2026-03-02T18:00:00Z",
    ... })
    >>> row = session_to_db_row(session)
"""

from domain.converters.db_converters import (
    db_row_to_catalog_entry,
    db_row_to_health_metric,
    db_row_to_log,
    db_row_to_profile,
    db_row_to_session,
    db_row_to_template,
    session_to_db_row,
)

__all__ = [
    "db_row_to_template",
    "db_row_to_session",
    "session_to_db_row",
    "db_row_to_log",
    "db_row_to_catalog_entry",
    "db_row_to_profile",
    "db_row_to_health_metric",
]
