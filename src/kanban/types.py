"""Custom SQLAlchemy types for cross-database compatibility."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, TypeDecorator
from sqlalchemy.dialects.postgresql import CITEXT as PostgresCITEXT


class CITEXT(TypeDecorator):
    """Case-insensitive text type that works across different databases.

    Uses PostgreSQL's CITEXT for PostgreSQL and a plain String elsewhere, so
    emails are unique regardless of case in production while the models still
    create cleanly in the SQLite test database.
    """

    impl = String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        """Load the appropriate type implementation based on the database dialect."""
        if dialect.name == "postgresql":
            return dialect.type_descriptor(PostgresCITEXT())
        return dialect.type_descriptor(String(320))


class UTCDateTime(TypeDecorator):
    """Timestamp stored in UTC and always returned timezone-aware.

    SQLite drops tzinfo on the way in and hands back naive values; those are
    read back as UTC so expiry comparisons never mix naive and aware times.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
