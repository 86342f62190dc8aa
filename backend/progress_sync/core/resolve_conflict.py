"""Conflict Resolution — last-write-wins on the client-asserted updatedAt.

Invariants:
    - Accept when nothing is stored, or incoming >= existing (ties accepted: client retries)
    - Reject only when incoming is strictly earlier than existing
    - Compared as instants, never as raw strings ("...Z" vs "+00:00" must agree)

Design Decisions:
    - Scalar logical clock, no vector clocks: one secret ≈ one writer at a time,
      and the opaque snapshot cannot be merged anyway
"""

from progress_sync.core.validate_record import parse_timestamp


def should_accept_incoming(
    existing_updated_at: str | None, incoming_updated_at: str,
) -> bool:
    """Pure: decides whether an incoming write replaces the stored record."""
    if existing_updated_at is None:
        return True
    existing = parse_timestamp(existing_updated_at)
    if existing is None:
        return True
    incoming = parse_timestamp(incoming_updated_at)
    if incoming is None:
        raise ValueError(f"incoming updatedAt is not a timestamp: {incoming_updated_at!r}")
    return incoming >= existing
