"""Sync Entry ORM — one row per storage key, holding the JSON record and its expiry.

Invariants:
    - storage_key is the primary key (one record per sync key)
    - value holds the record exactly as the service built it
    - expires_at is epoch seconds (UTC); rows at or past it are treated as absent

Design Decisions:
    - Epoch integer over DateTime: SQLite drops tz info, integer compare is portable
    - Generic key/value shape: the table is a TTL store, not a record schema
"""

from sqlalchemy import String, BigInteger, JSON
from sqlalchemy.orm import Mapped, mapped_column

from progress_sync.db.base import Base


class SyncEntry(Base):
    """Key/value row with expiry for the progress-sync store."""
    __tablename__ = "progress_sync_entries"

    storage_key: Mapped[str] = mapped_column(String(200), primary_key=True)
    value: Mapped[dict] = mapped_column(JSON, nullable=False)
    expires_at: Mapped[int] = mapped_column(
        BigInteger, nullable=False, index=True,
    )
