"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from ledgerit.database.sqlalchemy_db import SQLAlchemyDatabase
from ledgerit.domain.entities import ShortMonthPolicy
from ledgerit.domain.errors import ValidationError


def resolve_short_month_policy(policy: Optional[str] = None) -> ShortMonthPolicy:
    """Resolve the short-month policy.

    Args:
        policy: "clamp" or "skip". If None, checks the
            LEDGERIT_SHORT_MONTH_POLICY environment variable, then defaults
            to "clamp".
    """
    if policy is None:
        policy = os.environ.get("LEDGERIT_SHORT_MONTH_POLICY", ShortMonthPolicy.CLAMP.value)
    try:
        return ShortMonthPolicy(policy.strip().lower())
    except ValueError:
        raise ValidationError(
            f"Unknown short month policy '{policy}'. Supported: clamp, skip"
        )


def create_database(
    database_url: str, short_month_policy: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a database instance for any SQLAlchemy URL."""
    return SQLAlchemyDatabase(
        database_url, short_month_policy=resolve_short_month_policy(short_month_policy)
    )


def create_sqlite_database(
    database_path: Optional[str] = None, short_month_policy: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks LEDGERIT_DB_PATH
            environment variable, then defaults to ~/.ledgerit/ledgerit.db
        short_month_policy: Optional recurrence short-month policy

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("LEDGERIT_DB_PATH")

    if database_path is None:
        # Default to ~/.ledgerit/ledgerit.db
        home = Path.home()
        db_dir = home / ".ledgerit"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "ledgerit.db")

    database_url = f"sqlite:///{database_path}"
    return create_database(database_url, short_month_policy=short_month_policy)
