"""Conflict Resolution — tests for last-write-wins on updatedAt.

Tests cover:
    - no existing record → accept
    - newer incoming → accept; equal → accept (retry); older → reject
    - comparison is on instants, not strings
    - unparseable stored clock is treated as absent
"""

import pytest

from progress_sync.core.resolve_conflict import should_accept_incoming


def test_accepts_when_nothing_stored():
    assert should_accept_incoming(None, "2026-02-20T12:00:00Z") is True


def test_accepts_newer_incoming():
    assert should_accept_incoming(
        "2026-02-20T12:00:00Z", "2026-02-20T12:00:00.001Z",
    ) is True


def test_accepts_equal_timestamps():
    assert should_accept_incoming(
        "2026-02-20T12:00:00Z", "2026-02-20T12:00:00Z",
    ) is True


def test_rejects_older_incoming():
    assert should_accept_incoming(
        "2026-02-20T12:00:00Z", "2026-02-20T11:00:00Z",
    ) is False


def test_equal_instants_in_different_notation_are_ties():
    assert should_accept_incoming(
        "2026-02-20T12:00:00.000Z", "2026-02-20T13:00:00+01:00",
    ) is True


def test_compares_instants_not_strings():
    # Lexicographically "…T12:30…+02:00" > "…T11:00…Z", but as instants it is earlier.
    assert should_accept_incoming(
        "2026-02-20T11:00:00Z", "2026-02-20T12:30:00+02:00",
    ) is False


def test_unparseable_existing_clock_accepts():
    assert should_accept_incoming("not-a-date", "2026-02-20T12:00:00Z") is True


def test_unparseable_incoming_clock_raises():
    with pytest.raises(ValueError):
        should_accept_incoming("2026-02-20T12:00:00Z", "not-a-date")
