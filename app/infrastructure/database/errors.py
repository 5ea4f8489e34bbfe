"""Classification of database integrity failures."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """True only for unique-constraint collisions.

    Foreign key, NOT NULL and CHECK failures are integrity errors too but
    are not conflicts a client can resolve by picking another value.
    """
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        return code == UNIQUE_VIOLATION_SQLSTATE
    message = str(orig).lower()
    # sqlite: "UNIQUE constraint failed: ...", mysql: "Duplicate entry ..."
    return "unique constraint" in message or "duplicate entry" in message


__all__ = ["UNIQUE_VIOLATION_SQLSTATE", "is_unique_violation"]
